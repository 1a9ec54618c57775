"""Builders for synthetic MPEG-2 transport stream packets used by the tests."""

from typing import List, Optional, Sequence, Tuple

PACKET_SIZE = 188
VIDEO_PES = b"\x00\x00\x01\xe0\x00\x00\x80\x80\x05"
AUDIO_PES = b"\x00\x00\x01\xc0\x00\x00\x80\x80\x05"


def ts_packet(
    pid: int,
    pusi: bool = False,
    payload: bytes = b"",
    adaptation: Optional[bytes] = None,
    sync: int = 0x47,
    has_payload: bool = True,
) -> bytes:
    """Build one 188-byte packet, padded with 0xFF stuffing."""
    afc = (0x1 if has_payload else 0) | (0x2 if adaptation is not None else 0)
    header = bytes(
        [
            sync,
            (0x40 if pusi else 0) | ((pid >> 8) & 0x1F),
            pid & 0xFF,
            (afc << 4),
        ]
    )
    body = b""
    if adaptation is not None:
        body += bytes([len(adaptation)]) + adaptation
    body += payload
    pkt = header + body
    assert len(pkt) <= PACKET_SIZE
    return pkt + b"\xff" * (PACKET_SIZE - len(pkt))


def video_segment(extra_packets: int = 2, pes: bytes = VIDEO_PES) -> bytes:
    """A segment holding a single PES start on PID 256 followed by continuation packets."""
    out = ts_packet(0, payload=b"\x00" * 8)
    out += ts_packet(256, pusi=True, payload=pes)
    for _ in range(extra_packets):
        out += ts_packet(256, payload=b"\x42" * 100)
    return out


def write_segments(path, segments: Sequence[bytes]) -> Tuple[List[int], List[int]]:
    """Write segments back to back; returns (positions, lengths)."""
    positions: List[int] = []
    lengths: List[int] = []
    offset = 0
    with open(path, "wb") as f:
        for seg in segments:
            f.write(seg)
            positions.append(offset)
            lengths.append(len(seg))
            offset += len(seg)
    return positions, lengths
