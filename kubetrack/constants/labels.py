"""Pod label keys and values used to find Spark applications."""

from typing import Final

SPARK_APP_ID_LABEL: Final = "spark-app-selector"
SPARK_APP_TAG_LABEL: Final = "spark-app-tag"
SPARK_ROLE_LABEL: Final = "spark-role"
SPARK_ROLE_DRIVER: Final = "driver"
SPARK_ROLE_EXECUTOR: Final = "executor"
SPARK_UI_URL_LABEL: Final = "spark-ui-url"

__all__ = [
    "SPARK_APP_ID_LABEL",
    "SPARK_APP_TAG_LABEL",
    "SPARK_ROLE_DRIVER",
    "SPARK_ROLE_EXECUTOR",
    "SPARK_ROLE_LABEL",
    "SPARK_UI_URL_LABEL",
]
