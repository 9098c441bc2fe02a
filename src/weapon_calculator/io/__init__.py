from .loader import Loader, load_regulation_data, regulation_source
from .sources import DictSource, FileSource, UrlSource

__all__ = [
    "DictSource",
    "FileSource",
    "Loader",
    "UrlSource",
    "load_regulation_data",
    "regulation_source",
]
