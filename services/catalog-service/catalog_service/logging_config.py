from backend_common.logging import configure_logging as _configure_logging

SERVICE_NAME = "catalog-service"


def configure_logging() -> None:
    _configure_logging(SERVICE_NAME)
