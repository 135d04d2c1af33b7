"""Global enums — event names must match the client page exactly."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    TEAM = "team"
    LISTENER = "listener"


class ToastType(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class InboundEvent(str, Enum):
    """Client -> server."""
    AUTH_LOGIN = "auth:login"
    UPDATE_CONFIG = "admin:updateConfig"
    DELETE_CATEGORY = "admin:deleteCategory"
    RESET_PLAYER = "admin:resetPlayer"
    RESET_CATEGORY = "admin:resetCategory"
    RESET_TEAM = "admin:resetTeam"
    RESET_ALL = "admin:resetAll"
    BID_REQUEST = "bid:request"
    PLAYER_BID = "player:bid"
    PLAYER_SOLD = "player:sold"
    PLAYERS_SAVE = "players:save"
    PLAYERS_LOAD = "players:load"
    PLAYERS_CLEAR = "players:clear"
    TEXTAREA_UPDATE = "textarea:update"


class OutboundEvent(str, Enum):
    """Server -> one or all."""
    INIT_AUTH = "init:auth"
    AUTH_SUCCESS = "auth:success"
    AUTH_FAIL = "auth:fail"
    STATE_UPDATED = "state:updated"
    ADMIN_TOAST = "admin:toast"
    ACTION_REJECTED = "action:rejected"
    PLAYER_BID = "player:bid"
    PLAYER_SOLD = "player:sold"
    PLAYERS_LOAD = "players:load"
    PLAYERS_CLEAR = "players:clear"
    TEXTAREA_UPDATE = "textarea:update"
    SERVER_RELOAD = "server:reload"
