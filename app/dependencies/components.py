import os

from app.bootstrap.components import Components


def get_components(
        env: str | None = None,
        config_path: str = 'configuration'
) -> Components:
    return Components(env or os.getenv("APP_ENV", "development"), config_path)
