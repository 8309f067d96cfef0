from dotenv import load_dotenv
from os import getenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# How to use:
# Import settings from this module and access the attributes, e.g. settings.SUPABASE_URL
class Settings:
    PROJECT_NAME: str = getenv("PROJECT_NAME", "Site Images")
    VERSION: str = getenv("VERSION", "0.1.0")
    API_V1_STR: str = "/api/v1"

    SUPABASE_URL: str = getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = getenv("SUPABASE_ANON_KEY", "")

    OVERRIDES_TABLE: str = getenv("OVERRIDES_TABLE", "image_overrides")
    STORAGE_BUCKET: str = getenv("STORAGE_BUCKET", "gallery-images")

    OVERRIDES_CACHE_TTL_SECONDS: float = float(getenv("OVERRIDES_CACHE_TTL_SECONDS", "300"))
    OVERRIDES_ERROR_RETRY_SECONDS: float = float(getenv("OVERRIDES_ERROR_RETRY_SECONDS", "30"))

    # Rewrite object URLs on *.supabase.co hosts to the image render endpoint.
    IMAGE_RENDER_ENDPOINT: bool = _flag("IMAGE_RENDER_ENDPOINT")

    LOG_LEVEL: str = getenv("LOG_LEVEL", "INFO")

settings = Settings()
