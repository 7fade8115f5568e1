"""Pydantic model for the bridge's config.toml."""

from pydantic import BaseModel, ConfigDict, Field

from wsl_clip_bridge.core.constants import BYTES_PER_MB


class BridgeConfig(BaseModel):
    """Optional settings read from config.toml.

    Every field is optional; an absent field leaves the corresponding
    behaviour at its built-in default. Unknown keys are ignored so a config
    written for a newer version still loads. Values are validated strictly:
    a quoted number or boolean is a type error, not a coercion.

    Example config.toml:
        ttl_secs = 300
        max_image_dimension = 1568
        max_file_size_mb = 100
        restrict_to_home = true
        allowed_directories = ["/mnt/c/Users/me/Pictures/ShareX"]
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    ttl_secs: int | None = Field(default=None, ge=0)
    """Seconds a cached payload stays valid (clamped to 24h)."""

    max_image_dimension: int | None = Field(default=None, ge=0)
    """Images with a larger side are downscaled to this many pixels. 0 disables."""

    max_file_size_mb: int | None = Field(default=None, ge=0)
    """Maximum input size in MiB. 0 disables the limit."""

    restrict_to_home: bool | None = None
    """Only accept input files that resolve inside $HOME."""

    allowed_directories: list[str] | None = None
    """If non-empty, input files must resolve inside one of these directories."""

    @property
    def max_file_size_bytes(self) -> int | None:
        """The file size limit in bytes, or None when unset or disabled."""
        if not self.max_file_size_mb:
            return None
        return self.max_file_size_mb * BYTES_PER_MB
