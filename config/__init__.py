import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown means development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def parse_roles(value: str) -> tuple:
    # "admin, staff" and "admin,staff" name the same roles.
    return tuple(r.strip() for r in value.split(",") if r.strip())
