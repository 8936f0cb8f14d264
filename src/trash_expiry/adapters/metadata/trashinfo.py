"""Metadata adapter for freedesktop ``.trashinfo`` descriptors."""

import configparser
import logging
import re
from datetime import datetime
from pathlib import Path

from ...domain.errors import (
    BadPathDerivation,
    BadTimestamp,
    MalformedDescriptor,
    MissingKey,
    MissingSection,
)
from ...domain.models import TrashRecord
from ...ports.metadata import MetadataPort

logger = logging.getLogger(__name__)

SECTION = "Trash Info"
PATH_KEY = "Path"
DATE_KEY = "DeletionDate"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
FILES_DIR = "files"
# Keeps [DEFAULT] an ordinary section whose keys are not inherited
NO_DEFAULT_SECTION = "\x00"


def payload_path_for(descriptor_path: Path) -> Path:
    """Derive ``<root>/files/<name>`` from ``<root>/info/<name>.trashinfo``.

    Purely lexical: the filesystem is never consulted.
    """
    if len(descriptor_path.parents) < 2:
        raise BadPathDerivation(descriptor_path, "Couldn't go up to trash dir")
    stem = descriptor_path.stem
    if not stem:
        raise BadPathDerivation(descriptor_path, "No trash info file name")
    return descriptor_path.parents[1] / FILES_DIR / stem


def parse_deletion_date(path: Path, value: str) -> datetime:
    """Parse a DeletionDate value as local time.

    Only the exact ``YYYY-MM-DDTHH:MM:SS`` form is accepted.
    """
    if not DATE_PATTERN.fullmatch(value):
        raise BadTimestamp(path, f"Invalid {DATE_KEY}: {value!r}")
    try:
        # Naive values carry no offset; astimezone() pins them to local time
        return datetime.strptime(value, DATE_FORMAT).astimezone()
    except (ValueError, OverflowError, OSError) as e:
        raise BadTimestamp(path, f"Invalid {DATE_KEY}: {value!r} ({e})") from e


def _read_descriptor(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None, delimiters=("=",), default_section=NO_DEFAULT_SECTION
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(path.read_text(encoding="utf-8"), source=str(path))
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        raise MalformedDescriptor(path, str(e)) from e
    return parser


class TrashInfoAdapter(MetadataPort):
    """Reads ``[Trash Info]`` descriptors from a trash ``info/`` directory."""

    def parse(self, path: Path) -> TrashRecord:
        payload_path = payload_path_for(path)
        parser = _read_descriptor(path)

        if not parser.has_section(SECTION):
            raise MissingSection(path, f"No [{SECTION}] section")
        section = parser[SECTION]

        if PATH_KEY not in section:
            raise MissingKey(path, PATH_KEY)
        if DATE_KEY not in section:
            raise MissingKey(path, DATE_KEY)

        record = TrashRecord(
            metadata_path=path,
            payload_path=payload_path,
            original_path=section[PATH_KEY],
            deletion_timestamp=parse_deletion_date(path, section[DATE_KEY]),
        )
        logger.debug(f"Parsed {path.name}: {record.original_path}")
        return record
