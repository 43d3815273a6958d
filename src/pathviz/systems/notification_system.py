"""User-visible notice sink; one notice at a time, expiring after a few seconds."""
from __future__ import annotations

import logging

from esper import World

from pathviz.constants import NOTICE_SECONDS
from pathviz.events.bus import EVENT_NOTIFY, EVENT_TICK, EventBus
from pathviz.utils.grid_state import get_notice

logger = logging.getLogger(__name__)


class NotificationSystem:
    def __init__(self, world: World, event_bus: EventBus, *, duration: float = NOTICE_SECONDS):
        self.world = world
        self.event_bus = event_bus
        self.duration = duration
        self.event_bus.subscribe(EVENT_NOTIFY, self.on_notify)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_notify(self, sender, **kwargs):
        message = kwargs.get('message')
        if not message:
            return
        kind = kwargs.get('kind') or "info"
        notice = get_notice(self.world)
        notice.message = str(message)
        notice.kind = kind
        notice.remaining = self.duration
        logger.info("Notice (%s): %s", kind, message)

    def on_tick(self, sender, **kwargs):
        notice = get_notice(self.world)
        if not notice.message:
            return
        try:
            dt = float(kwargs.get('dt', 1 / 60))
        except (TypeError, ValueError):
            dt = 1 / 60
        notice.remaining = max(0.0, notice.remaining - dt)
        if notice.remaining == 0.0:
            notice.message = ""
