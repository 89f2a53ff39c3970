"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH = "/api/ws/chat"

# Frame keys (server -> client)
WS_KEY_MSG = "msg"
WS_KEY_MSG_ID = "msgId"
WS_KEY_KIND = "kind"
WS_KEY_CREATE_TIME = "createTime"

WS_CREATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Control messages are JSON objects carrying only a "kind" of ping/pong/close.
WS_CONTROL_PING = "ping"
WS_CONTROL_PONG = "pong"
WS_CONTROL_CLOSE = "close"
WS_CONTROL_KINDS = frozenset({WS_CONTROL_PING, WS_CONTROL_PONG, WS_CONTROL_CLOSE})

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_KEEPALIVE_CODE = 4000

WS_CLOSE_NORMAL_REASON = "session closed"
WS_CLOSE_KEEPALIVE_REASON = "keepalive failed"

# Keepalive: probes go out every ping period; the read deadline is the ping wait.
ENV_WS_PING_PERIOD_S = "WS_PING_PERIOD_S"
ENV_WS_PING_WAIT_S = "WS_PING_WAIT_S"
ENV_WS_WRITE_WAIT_S = "WS_WRITE_WAIT_S"
ENV_WS_CANCEL_RELAYS_ON_CLOSE = "WS_CANCEL_RELAYS_ON_CLOSE"

DEFAULT_WS_PING_PERIOD_S = 50.0
DEFAULT_WS_PING_WAIT_S = 60.0
DEFAULT_WS_WRITE_WAIT_S = 10.0
DEFAULT_WS_CANCEL_RELAYS_ON_CLOSE = False

WS_PING_PERIOD_S = float(os.getenv(ENV_WS_PING_PERIOD_S, str(DEFAULT_WS_PING_PERIOD_S)))
WS_WRITE_WAIT_S = float(os.getenv(ENV_WS_WRITE_WAIT_S, str(DEFAULT_WS_WRITE_WAIT_S)))

# Give the monitor this long to acknowledge a shutdown request before cancelling it.
WS_KEEPALIVE_STOP_TIMEOUT_S = 5.0
WS_DISPATCHER_CLOSE_TIMEOUT_S = 5.0

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_MSG",
    "WS_KEY_MSG_ID",
    "WS_KEY_KIND",
    "WS_KEY_CREATE_TIME",
    "WS_CREATE_TIME_FORMAT",
    "WS_CONTROL_PING",
    "WS_CONTROL_PONG",
    "WS_CONTROL_CLOSE",
    "WS_CONTROL_KINDS",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_KEEPALIVE_CODE",
    "WS_CLOSE_NORMAL_REASON",
    "WS_CLOSE_KEEPALIVE_REASON",
    "ENV_WS_PING_PERIOD_S",
    "ENV_WS_PING_WAIT_S",
    "ENV_WS_WRITE_WAIT_S",
    "ENV_WS_CANCEL_RELAYS_ON_CLOSE",
    "DEFAULT_WS_PING_PERIOD_S",
    "DEFAULT_WS_PING_WAIT_S",
    "DEFAULT_WS_WRITE_WAIT_S",
    "DEFAULT_WS_CANCEL_RELAYS_ON_CLOSE",
    "WS_PING_PERIOD_S",
    "WS_WRITE_WAIT_S",
    "WS_KEEPALIVE_STOP_TIMEOUT_S",
    "WS_DISPATCHER_CLOSE_TIMEOUT_S",
]
