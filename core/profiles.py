# core/profiles.py
from dataclasses import dataclass
from typing import Dict, Final, Tuple


@dataclass(frozen=True)
class VideoProfile:
    """
    Encoding profile a rendition was produced with.
    `resolution` keeps the transcoder's "WxH" string form.
    """

    name: str
    resolution: str
    framerate: int

    def dimensions(self) -> Tuple[int, int]:
        """Parse `resolution` into (width, height)."""
        parts = self.resolution.lower().split("x")
        if len(parts) != 2:
            raise ValueError(f"invalid resolution {self.resolution!r}")
        try:
            w, h = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"invalid resolution {self.resolution!r}") from None
        if w <= 0 or h <= 0:
            raise ValueError(f"invalid resolution {self.resolution!r}")
        return w, h

    @property
    def pixels(self) -> int:
        w, h = self.dimensions()
        return w * h


PROFILES: Final[Dict[str, VideoProfile]] = {
    p.name: p
    for p in (
        VideoProfile("P720p60fps16x9", "1280x720", 60),
        VideoProfile("P720p30fps16x9", "1280x720", 30),
        VideoProfile("P720p25fps16x9", "1280x720", 25),
        VideoProfile("P720p30fps4x3", "960x720", 30),
        VideoProfile("P576p30fps16x9", "1024x576", 30),
        VideoProfile("P576p25fps16x9", "1024x576", 25),
        VideoProfile("P360p30fps16x9", "640x360", 30),
        VideoProfile("P360p25fps16x9", "640x360", 25),
        VideoProfile("P360p30fps4x3", "480x360", 30),
        VideoProfile("P240p30fps16x9", "426x240", 30),
        VideoProfile("P240p25fps16x9", "426x240", 25),
        VideoProfile("P240p30fps4x3", "320x240", 30),
        VideoProfile("P144p30fps16x9", "256x144", 30),
        VideoProfile("P144p25fps16x9", "256x144", 25),
    )
}


def lookup_profile(name: str) -> VideoProfile:
    """Resolve a profile name from transcoder output. Raises ValueError for unknown names."""
    try:
        return PROFILES[name]
    except KeyError:
        valid = ", ".join(sorted(PROFILES))
        raise ValueError(
            f"Invalid rendition {name}. Valid renditions are: {valid}"
        ) from None
