"""
Per-track waveform painting with redraw skipping, plus the peak-loaded
observer wiring that feeds painters.

WaveformPainter.update() is meant to be called once per animation frame; it
only hands a fresh draw list to the paint callback when something changed.
"""
import logging
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from regionkit.core.params import get_float
from regionkit.core.types import DrawInstruction, PeakBuffer, Region
from regionkit.waveform.mapper import DEFAULT_CHANNEL_PADDING, map_regions, region_fingerprint

logger = logging.getLogger(__name__)

PaintCallback = Callable[[List[DrawInstruction]], None]
PeaksCallback = Callable[[PeakBuffer], None]


# -----------------------------------------------------------------------------
# Peak-loaded subscriptions
# -----------------------------------------------------------------------------

class Subscription:
    """Handle returned by PeakSubscriptions.subscribe; terminate() unregisters."""

    def __init__(self, owner: "PeakSubscriptions", track_id: Hashable, callback: PeaksCallback):
        self._owner = owner
        self.track_id = track_id
        self.callback = callback
        self.active = True

    def terminate(self) -> None:
        if self.active:
            self.active = False
            self._owner._remove(self)


class PeakSubscriptions:
    """Register/unregister observers of peak data per track."""

    def __init__(self):
        self._observers: Dict[Hashable, List[Subscription]] = {}

    def subscribe(self, track_id: Hashable, callback: PeaksCallback) -> Subscription:
        sub = Subscription(self, track_id, callback)
        self._observers.setdefault(track_id, []).append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        subs = self._observers.get(sub.track_id, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._observers.pop(sub.track_id, None)

    def notify_loaded(self, track_id: Hashable, peaks: PeakBuffer) -> int:
        """Deliver loaded peaks to the track's observers. Returns how many were called."""
        subs = list(self._observers.get(track_id, []))
        for sub in subs:
            sub.callback(peaks)
        return len(subs)

    def count(self, track_id: Hashable) -> int:
        return len(self._observers.get(track_id, []))


# -----------------------------------------------------------------------------
# Painter
# -----------------------------------------------------------------------------

class WaveformPainter:
    """
    Recomputes draw instructions for one track only when peaks identity,
    canvas size or region geometry changed since the last paint.
    """

    def __init__(self, track_id: Hashable, paint: PaintCallback, options: Optional[dict] = None):
        self.track_id = track_id
        self._paint = paint
        self.channel_padding = get_float(options or {}, "waveform.channel_padding", DEFAULT_CHANNEL_PADDING)
        self._peaks: Optional[PeakBuffer] = None
        self._needs_update = True
        self._last_key: Optional[Tuple] = None
        self._last_peaks: Optional[PeakBuffer] = None
        self._terminated = False
        self.paint_count = 0

    @property
    def peaks(self) -> Optional[PeakBuffer]:
        return self._peaks

    def set_peaks(self, peaks: PeakBuffer) -> None:
        self._peaks = peaks
        self.request_update()

    def request_update(self) -> None:
        """Mark dirty; several requests between frames collapse into one paint."""
        self._needs_update = True

    def update(
        self,
        width: int,
        height: float,
        bpm: float,
        regions: Sequence[Region] = (),
        max_duration: Optional[float] = None,
        audio_duration: Optional[float] = None,
    ) -> bool:
        """
        Paint if needed. Returns True when the paint callback was invoked.
        A pending request_update() forces a paint even when nothing changed.
        """
        if self._terminated or width <= 0 or height <= 0:
            return False

        forced = self._needs_update
        self._needs_update = False

        peaks = self._peaks
        if peaks is None:
            if not forced:
                return False
            # Clear
            self._paint([])
            self._last_peaks = None
            self._last_key = None
            return True

        key = (width, height, bpm, max_duration, audio_duration, region_fingerprint(regions))
        if not forced and self._last_peaks is peaks and self._last_key == key:
            logger.debug("[Painter] %s unchanged, skipping redraw", self.track_id)
            return False

        instructions = map_regions(
            regions,
            width,
            height,
            bpm,
            peaks,
            max_duration=max_duration,
            audio_duration=audio_duration,
            channel_padding=self.channel_padding,
        )
        self._paint(instructions)
        self._last_peaks = peaks
        self._last_key = key
        self.paint_count += 1
        return True

    def terminate(self) -> None:
        self._terminated = True
        self._peaks = None
        self._last_peaks = None


# -----------------------------------------------------------------------------
# Board: one painter per track
# -----------------------------------------------------------------------------

class WaveformBoard:
    """
    Owns the painters of several tracks, subscribes them to peak loads and
    reports once every track has been painted with real peaks.
    """

    def __init__(
        self,
        subscriptions: PeakSubscriptions,
        paint_factory: Callable[[Hashable], PaintCallback],
        on_all_rendered: Optional[Callable[[], None]] = None,
        options: Optional[dict] = None,
    ):
        self._subscriptions = subscriptions
        self._paint_factory = paint_factory
        self._on_all_rendered = on_all_rendered
        self._options = options or {}
        self._painters: Dict[Hashable, WaveformPainter] = {}
        self._subs: List[Subscription] = []
        self._rendered: set = set()
        self._all_rendered_fired = False

    def add_track(self, track_id: Hashable) -> WaveformPainter:
        """Create the track's painter. Adding the same track twice keeps the first."""
        if track_id in self._painters:
            return self._painters[track_id]
        logger.debug("[Painter] Creating painter for %s", track_id)
        painter = WaveformPainter(track_id, self._paint_factory(track_id), self._options)
        self._painters[track_id] = painter
        self._subs.append(self._subscriptions.subscribe(track_id, painter.set_peaks))
        return painter

    def painter(self, track_id: Hashable) -> Optional[WaveformPainter]:
        return self._painters.get(track_id)

    @property
    def track_ids(self) -> List[Hashable]:
        return list(self._painters)

    def update(
        self,
        width: int,
        height: float,
        bpm: float,
        regions_by_track: Optional[Dict[Hashable, Sequence[Region]]] = None,
        max_duration: Optional[float] = None,
        audio_durations: Optional[Dict[Hashable, float]] = None,
    ) -> int:
        """Run one frame for every track. Returns how many painters painted."""
        regions_by_track = regions_by_track or {}
        audio_durations = audio_durations or {}
        painted = 0
        for track_id, painter in self._painters.items():
            did_paint = painter.update(
                width,
                height,
                bpm,
                regions=regions_by_track.get(track_id, ()),
                max_duration=max_duration,
                audio_duration=audio_durations.get(track_id),
            )
            if not did_paint:
                continue
            painted += 1
            if painter.peaks is not None and track_id not in self._rendered:
                self._rendered.add(track_id)
                logger.debug(
                    "[Rendering] Visually rendered %s (%d/%d)",
                    track_id, len(self._rendered), len(self._painters),
                )
        self._check_all_rendered()
        return painted

    def _check_all_rendered(self) -> None:
        if self._all_rendered_fired or not self._painters:
            return
        if len(self._rendered) == len(self._painters):
            self._all_rendered_fired = True
            logger.info("[Rendering] All %d waveforms rendered", len(self._painters))
            if self._on_all_rendered is not None:
                self._on_all_rendered()

    def terminate(self) -> None:
        logger.debug("[Painter] Cleaning up %d painters", len(self._painters))
        for sub in self._subs:
            sub.terminate()
        self._subs.clear()
        for painter in self._painters.values():
            painter.terminate()
        self._painters.clear()
        self._rendered.clear()
        self._all_rendered_fired = False
