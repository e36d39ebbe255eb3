"""Garmin binary track log transfer."""

from navlink.garmin.framing import GarminFramer, destuff, split_frames
from navlink.garmin.records import GarminRecordDecoder, decode_tracks
from navlink.garmin.transfer import (
    TrackTransfer,
    get_tracks,
    get_tracks_from_bytes,
    get_tracks_from_file,
)
from navlink.garmin.types import Track, TrackPoint, TransferState

__all__ = [
    "GarminFramer",
    "GarminRecordDecoder",
    "Track",
    "TrackPoint",
    "TrackTransfer",
    "TransferState",
    "decode_tracks",
    "destuff",
    "get_tracks",
    "get_tracks_from_bytes",
    "get_tracks_from_file",
    "split_frames",
]
