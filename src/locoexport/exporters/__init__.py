"""Export commands: fetch one vendor export and write it in a platform layout.

Every exporter takes a LocoClient and an existing output directory. Single
payload exports return the number of files written; the concurrent iOS
exports return an ExportSummary and raise ExportError if any task failed.

Python 3.13+.
"""

from .android import export_android
from .hugo import export_hugo
from .i18next import export_i18next
from .ios import export_ios
from .ioscatalog import export_ios_catalog
from .po import export_po
from .results import ExportResult, ExportSummary, run_export_tasks

__all__ = [
    "ExportResult",
    "ExportSummary",
    "export_android",
    "export_hugo",
    "export_i18next",
    "export_ios",
    "export_ios_catalog",
    "export_po",
    "run_export_tasks",
]
