from .formatting_utils import (
    InvocationLabel,
    LabelCategory,
    describe_invocation,
    format_invocation_status,
    make_numbered_output,
    maybe_truncate,
)

__all__ = [
    "InvocationLabel",
    "LabelCategory",
    "describe_invocation",
    "format_invocation_status",
    "make_numbered_output",
    "maybe_truncate",
]
