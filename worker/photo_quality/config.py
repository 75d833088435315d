from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class QualityThresholds(BaseModel):
    blur_threshold: float = 100.0
    exposure_ratio: float = 0.01     # fraction of pixels, strict
    under_luminance: float = 10.0
    over_luminance: float = 245.0

class WorkerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PHOTO_QUALITY_", env_nested_delimiter="__")

    thresholds: QualityThresholds = Field(default_factory=QualityThresholds)

    max_upload_mb: int = 50
    max_image_pixels: int = 40_000_000
    log_level: str = "INFO"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024
