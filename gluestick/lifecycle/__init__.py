from gluestick.lifecycle.hooks import (
    Hook,
    pre_validate,
    pre_save,
    post_delete,
    collect_hooks,
    run_hooks,
)
from gluestick.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    QueryEvent,
    add_listener,
    remove_listener,
    get_events,
    clear_events,
    track_query,
)

__all__ = [
    "Hook",
    "pre_validate",
    "pre_save",
    "post_delete",
    "collect_hooks",
    "run_hooks",
    "enable_tracing",
    "disable_tracing",
    "QueryEvent",
    "add_listener",
    "remove_listener",
    "get_events",
    "clear_events",
    "track_query",
]
