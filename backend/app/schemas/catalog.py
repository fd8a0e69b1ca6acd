from pydantic import BaseModel
from typing import Literal, Tuple

class ModelCard(BaseModel):
    model: str
    description: str
    modality: Literal["chat", "vision", "audio", "image"]

# ==========================================
# 可用模型目录 (静态数据，不请求上游)
# ==========================================
MODEL_CATALOG: Tuple[ModelCard, ...] = (
    ModelCard(
        model="THUDM/GLM-4.1V-9B-Thinking",
        modality="vision",
        description=(
            "GLM-4.1V-9B-Thinking 是由智谱 AI 和清华大学 KEG 实验室联合发布的一款开源视觉语言模型（VLM），"
            "专为处理复杂的多模态认知任务而设计。该模型基于 GLM-4-9B-0414 基础模型，通过引入“思维链”"
            "（Chain-of-Thought）推理机制和采用强化学习策略，显著提升了其跨模态的推理能力和稳定性。"
            "作为一个 9B 参数规模的轻量级模型，它在部署效率和性能之间取得了平衡，在 28 项权威评测基准中，"
            "有 18 项的表现持平甚至超越了 72B 参数规模的 Qwen-2.5-VL-72B。该模型不仅在图文理解、"
            "数学科学推理、视频理解等任务上表现卓越，还支持高达 4K 分辨率的图像和任意宽高比输入"
        ),
    ),
    ModelCard(
        model="deepseek-ai/DeepSeek-R1-0528-Qwen3-8B",
        modality="chat",
        description=(
            "DeepSeek-R1-0528-Qwen3-8B 是通过从 DeepSeek-R1-0528 模型蒸馏思维链到 Qwen3 8B Base 获得的模型。"
            "该模型在开源模型中达到了最先进（SOTA）的性能，在 AIME 2024 测试中超越了 Qwen3 8B 10%，"
            "并达到了 Qwen3-235B-thinking 的性能水平。该模型在数学推理、编程和通用逻辑等多个基准测试中"
            "表现出色，其架构与 Qwen3-8B 相同，但共享 DeepSeek-R1-0528 的分词器配置"
        ),
    ),
    ModelCard(
        model="Qwen/Qwen3-8B",
        modality="chat",
        description=(
            "Qwen3-8B 是通义千问系列的最新大语言模型，拥有 8.2B 参数量。该模型独特地支持在思考模式"
            "（适用于复杂逻辑推理、数学和编程）和非思考模式（适用于高效的通用对话）之间无缝切换，"
            "显著增强了推理能力。模型在数学、代码生成和常识逻辑推理上表现优异，并在创意写作、角色扮演"
            "和多轮对话等方面展现出卓越的人类偏好对齐能力。此外，该模型支持 100 多种语言和方言，"
            "具备出色的多语言指令遵循和翻译能力"
        ),
    ),
    ModelCard(
        model="FunAudioLLM/SenseVoiceSmall",
        modality="audio",
        description=(
            "SenseVoice 是一个具有多种语音理解能力的语音基础模型，包括自动语音识别（ASR）、"
            "口语语言识别（LID）、语音情感识别（SER）和音频事件检测（AED）。SenseVoice-Small 模型"
            "采用非自回归端到端框架，具有非常低的推理延迟。它支持 50 多种语言的多语言语音识别，"
            "在中文和粤语识别方面表现优于 Whisper 模型。此外，它还具有出色的情感识别和音频事件检测能力。"
            "该模型处理 10 秒音频仅需 70 毫秒，比 Whisper-Large 快 15 倍"
        ),
    ),
    ModelCard(
        model="Kwai-Kolors/Kolors",
        modality="image",
        description=(
            "Kolors 是由快手 Kolors 团队开发的基于潜在扩散的大规模文本到图像生成模型。该模型通过数十亿"
            "文本-图像对的训练，在视觉质量、复杂语义准确性以及中英文字符渲染方面展现出显著优势。"
            "它不仅支持中英文输入，在理解和生成中文特定内容方面也表现出色"
        ),
    ),
)
