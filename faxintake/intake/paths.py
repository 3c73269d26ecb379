from pathlib import PurePosixPath

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".tiff", ".tif"})


def is_organized(path: str) -> bool:
    """A blob inside a per-document folder, as opposed to a raw upload."""
    return "/" in path


def is_supported_format(path: str) -> bool:
    return PurePosixPath(path).suffix.lower() in SUPPORTED_EXTENSIONS


def file_name_of(path: str) -> str:
    return PurePosixPath(path).name


def organized_destination(path: str) -> str:
    """``fax1.pdf`` -> ``fax1/fax1.pdf``"""
    name = PurePosixPath(path)
    return f"{name.stem}/{name.name}"
