import logging

logger = logging.getLogger(__name__)


class SocketIOBroadcaster:
    """Pushes events to a Socket.IO room named after the chatting room key.

    Delivery is best effort: a failed emit is logged and never propagates, so a
    message that was stored stays stored.
    """

    def __init__(self, socketio):
        self.socketio = socketio

    def emit(self, channel, event, payload):
        try:
            self.socketio.emit(event, payload, to=channel)
        except Exception:
            logger.exception("Failed to broadcast %s to %s", event, channel)
