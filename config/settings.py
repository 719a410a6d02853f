"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ScrapeCreatorsSettings(BaseSettings):
    """ScrapeCreators API 配置 (内容搜索 + 广告库)"""
    api_key: Optional[str] = Field(default=None, description="ScrapeCreators API Key")
    base_url: str = Field(default="https://api.scrapecreators.com/v1", description="API 根地址")
    timeout: float = Field(default=30.0, description="请求超时时间(秒)")
    max_results: int = Field(default=50, description="每个平台最大返回结果数")

    class Config:
        env_prefix = "SCRAPECREATORS_"


class GroqSettings(BaseSettings):
    """Groq API 配置 (主 AI 供应商)"""
    api_key: Optional[str] = Field(default=None, description="Groq API Key")
    base_url: str = Field(default="https://api.groq.com/openai/v1", description="OpenAI 兼容接口地址")
    model: str = Field(default="llama-3.3-70b-versatile", description="模型名称")
    timeout: float = Field(default=120.0, description="请求超时时间(秒)")
    temperature: float = Field(default=0.3, description="生成温度")
    max_tokens: int = Field(default=2000, description="最大生成token数")

    class Config:
        env_prefix = "GROQ_"


class OllamaSettings(BaseSettings):
    """Ollama 配置 (自托管备用 AI 供应商)"""
    base_url: Optional[str] = Field(default="http://localhost:11434", description="Ollama 服务地址")
    model: str = Field(default="llama3.1:8b", description="模型名称")
    timeout: float = Field(default=120.0, description="请求超时时间(秒)")
    num_ctx: int = Field(default=8192, description="上下文窗口大小")

    class Config:
        env_prefix = "OLLAMA_"


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    scrapecreators: ScrapeCreatorsSettings = Field(default_factory=ScrapeCreatorsSettings)
    groq: GroqSettings = Field(default_factory=GroqSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """从指定的 .env 文件加载配置"""
        if env_path is None:
            # 默认查找 config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            scrapecreators=ScrapeCreatorsSettings(),
            groq=GroqSettings(),
            ollama=OllamaSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """获取全局配置单例 (进程启动时读取一次)"""
    return Settings.load_from_env_file()

