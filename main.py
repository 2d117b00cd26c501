import uvicorn

from app.bootstrap.bootstrapper import bootstrap_app
from app.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from app.dependencies.components import get_components


def main() -> None:
    components = get_components()
    configuration = components.get_component(ConfigurationInterface)

    app = bootstrap_app(env=components.get_env())

    uvicorn.run(
        app,
        host=configuration.get_configuration("HOST", str, default="127.0.0.1"),
        port=configuration.get_configuration("PORT", int, default=8000),
        log_config=None,
    )


if __name__ == "__main__":
    main()
