"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings.

    Only the logging setup and the DXF writer read these values. The
    geometry engine is driven entirely by explicit arguments.
    """

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # DXF export
    dxf_version: str = Field(default="R2010", description="DXF release written by the exporter")
    dxf_layer_prefix: str = Field(default="", description="Prefix prepended to every DXF layer name")

    class Config:
        env_file = ".env"
        env_prefix = "PY_VORONOI_"
        extra = "ignore"


settings = Settings()
