# core/packet_validator.py
"""
Structural checks on MPEG-2 transport stream segments.

Each evidence segment (byte offset + length) should hold whole 188-byte
packets and exactly one PES start on the video elementary stream. A worker
that splices, pads or shifts its output breaks one of these before the
clustering axes notice anything.
"""
import os
from typing import BinaryIO, Final, Sequence
from core.entities import Evidence
import logging

logger = logging.getLogger(__name__)

PACKET_SIZE: Final[int] = 188
SYNC_BYTE: Final[int] = 0x47
VIDEO_PID: Final[int] = 256
# Segments ending on this PID pass regardless of PES start count. Intent is
# unverified; keep it to this PID only.
TOLERATED_PID: Final[int] = 257

START_CODE: Final[bytes] = b"\x00\x00\x01"
VIDEO_STREAM_IDS: Final[range] = range(0xE0, 0xF0)
AUDIO_STREAM_IDS: Final[range] = range(0xC0, 0xE0)


class _SegmentRejected(Exception):
    pass


def packet_pid(pkt: bytes) -> int:
    return (pkt[1] & 0x1F) << 8 | pkt[2]


def payload_unit_start(pkt: bytes) -> bool:
    return bool((pkt[1] >> 6) & 1)


def packet_payload(pkt: bytes) -> bytes:
    """
    Payload bytes after the header and any adaptation field.
    Empty when the packet carries no payload or the adaptation field overruns it.
    """
    afc = (pkt[3] >> 4) & 0x3
    if not afc & 0x1:
        return b""
    start = 4
    if afc & 0x2:
        start = 5 + pkt[4]
    if start >= PACKET_SIZE:
        return b""
    return pkt[start:PACKET_SIZE]


def _pes_starts(f: BinaryIO, position: int, length: int) -> tuple[int, int]:
    """
    Scan one segment. Returns (pes_start_count, last_pid).
    Raises _SegmentRejected on structural damage and OSError on I/O failure.
    """
    f.seek(position)
    starts = 0
    last_pid = 0
    for n in range(length // PACKET_SIZE):
        pkt = f.read(PACKET_SIZE)
        if len(pkt) != PACKET_SIZE:
            raise _SegmentRejected(f"short read packet={n} got={len(pkt)}")
        if pkt[0] != SYNC_BYTE:
            raise _SegmentRejected(f"sync byte packet={n} got=0x{pkt[0]:02x}")

        last_pid = packet_pid(pkt)
        if last_pid != VIDEO_PID:
            continue

        payload = packet_payload(pkt)
        if not (payload_unit_start(pkt) and payload):
            continue
        if payload[:3] != START_CODE:
            raise _SegmentRejected(f"start code packet={n}")
        # a bare start code carries no stream id and counts as no start
        if len(payload) > 3 and (
            payload[3] in VIDEO_STREAM_IDS or payload[3] in AUDIO_STREAM_IDS
        ):
            starts += 1
    return starts, last_pid


def validate(path: str, positions: Sequence[float], lengths: Sequence[int]) -> bool:
    """
    True when every (position, length) segment of `path` is structurally sound.
    Pairs where both values are zero carry no segment and are skipped.
    I/O errors count as failure; the file is closed on every path.
    """
    if not os.path.isfile(path):
        # FIFOs and devices would block or stream forever on open()
        logger.warning("packet.invalid path=%s reason=not_regular_file", path)
        return False
    if len(positions) != len(lengths):
        logger.warning(
            "packet.invalid path=%s reason=mismatch positions=%d lengths=%d",
            path,
            len(positions),
            len(lengths),
        )
        return False
    try:
        with open(path, "rb") as f:
            for seg, (pos, length) in enumerate(zip(positions, lengths)):
                pos, length = int(pos), int(length)
                if pos == 0 and length == 0:
                    continue
                if pos < 0 or length < 0:
                    raise _SegmentRejected(f"negative range pos={pos} len={length}")
                starts, last_pid = _pes_starts(f, pos, length)
                if starts != 1 and last_pid != TOLERATED_PID:
                    raise _SegmentRejected(
                        f"pes starts={starts} last_pid={last_pid} segment={seg}"
                    )
    except _SegmentRejected as e:
        logger.info("packet.invalid path=%s reason=%s", path, e)
        return False
    except OSError as e:
        logger.warning("packet.io_error path=%s err=%s", path, e)
        return False
    except (ValueError, OverflowError) as e:
        # non-integral offsets (nan/inf) cannot address a segment
        logger.info("packet.invalid path=%s reason=range err=%s", path, e)
        return False
    return True


def validate_evidence(evidence: Evidence) -> bool:
    return validate(evidence.rendition_path, evidence.positions, evidence.lengths)
