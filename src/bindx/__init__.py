"""bindx: path-based reactive bindings for plain Python data."""

from importlib.metadata import version as _version

__version__ = _version("bindx")

from bindx._tracking import current as current_binding, set_max_notify_depth
from bindx.errors import (
    BindxError,
    PathError,
    MissingSegmentError,
    PathSyntaxError,
    NotificationDepthError,
    UnknownDirectiveError,
    UnknownMethodError,
)
from bindx.dep import Dep
from bindx.observable import ReactiveProperty, install, unwrap
from bindx.path import resolve_read, resolve_write
from bindx.binding import Binding, bind
from bindx.director import BindingDirector, BindingSite, StaticDirector
from bindx.viewmodel import ViewModel
# textual NOT auto-imported, opt-in only

__all__ = [
    "Binding",
    "bind",
    "BindingDirector",
    "BindingSite",
    "StaticDirector",
    "Dep",
    "ReactiveProperty",
    "install",
    "unwrap",
    "resolve_read",
    "resolve_write",
    "current_binding",
    "set_max_notify_depth",
    "ViewModel",
    "BindxError",
    "PathError",
    "MissingSegmentError",
    "PathSyntaxError",
    "NotificationDepthError",
    "UnknownDirectiveError",
    "UnknownMethodError",
]
