"""Mapping between player metadata names and ID3v2 frame identifiers."""

from __future__ import annotations

METADATA_MAP: tuple[tuple[str, str], ...] = (
    ("Title", "TIT2"),
    ("Title", "TT2"),
    ("Artist", "TPE1"),
    ("Artist", "TP1"),
    ("AlbumArtist", "TPE2"),
    ("AlbumArtist", "TP2"),
    ("Album", "TALB"),
    ("Album", "TAL"),
    ("Year", "TDRL"),
    ("Year", "TDRC"),
    ("Comment", "unknown"),
    ("Track", "TRCK"),
    ("Track", "TRK"),
    ("Copyright", "TCOP"),
    ("Composer", "TCOM"),
    ("Genre", "TCON"),
    ("Genre", "TCO"),
    ("EncodedBy", "TENC"),
    ("EncodedBy", "TEN"),
    ("Language", "TLAN"),
    ("Performer", "TPE3"),
    ("Performer", "TP3"),
    ("Publisher", "TPUB"),
    ("Encoder", "TSSE"),
    ("Disc", "TPOS"),
)


def map_tag(tag: str) -> str | None:
    """Return the metadata name for a container tag, or None if unmapped."""
    return next((name for name, source in METADATA_MAP if source == tag), None)


def tags_for(name: str) -> list[str]:
    """Return the container tags that map to metadata ``name``, in order."""
    return [source for our, source in METADATA_MAP if our == name]