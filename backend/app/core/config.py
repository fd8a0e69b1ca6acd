from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    网关配置类
    """
    # === 基础配置 ===
    PROJECT_NAME: str = "AI Relay Gateway"
    LOG_LEVEL: str = "INFO"

    # === 上游推理服务 (OpenAI 兼容) ===
    # 如果 .env 文件中有定义，这里的值会被覆盖
    API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.siliconflow.cn/v1"
    DEFAULT_CHAT_MODEL: str = "Qwen/Qwen2.5-7B-Instruct"

    # === 语音转写 ===
    TRANSCRIPTION_URL: str = "https://api.siliconflow.cn/v1/audio/transcriptions"
    TRANSCRIPTION_MODEL: str = "FunAudioLLM/SenseVoiceSmall"

    # === 生成式内容服务 (实验性) ===
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_PROMPT: str = "Explain how AI works in a few words"
    ENABLE_EXPERIMENTAL_ROUTES: bool = True

    # httpx 转发请求的超时 (秒)
    UPSTREAM_TIMEOUT: float = 120.0

    @property
    def GEMINI_GENERATE_URL(self) -> str:
        """生成 generateContent 接口地址"""
        return f"{self.GEMINI_BASE_URL}/models/{self.GEMINI_MODEL}:generateContent"

    # === Pydantic 配置 ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

# 实例化配置对象
settings = Settings()
