"""Enumerations for locoexport type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Platform(StrEnum):
    """Target platform whose locale naming convention is rendered.

    StrEnum provides automatic string conversion: str(Platform.IOS) == "ios"
    """

    ANDROID = "android"
    """Android resource qualifiers: values-pt-rBR, values-b+zh+Hant"""

    IOS = "ios"
    """iOS .lproj directories and string catalog keys: pt-PT.lproj, zh-Hans"""

    GETTEXT = "gettext"
    """gettext locale directories: pt_BR/LC_MESSAGES, sr@latn/LC_MESSAGES"""

    I18NEXT = "i18next"
    """i18next JSON file names: pt-BR.json"""

    HUGO = "hugo"
    """Hugo (go-i18n) YAML file names: pt-br.yaml"""


class TaskStatus(StrEnum):
    """Outcome of one export task.

    StrEnum provides automatic string conversion: str(TaskStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Payload fetched and written"""

    FETCH_FAILED = "fetch_failed"
    """Request failed or returned a non-200 status"""

    WRITE_FAILED = "write_failed"
    """Payload fetched but could not be processed or written"""


__all__ = [
    "Platform",
    "TaskStatus",
]
