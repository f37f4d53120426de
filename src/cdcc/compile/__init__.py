"""Component compilation — loads a description and fans out to generators."""

from cdcc.compile.fanout import ensure_seekable, generate_outputs, iter_outputs
from cdcc.compile.icons import find_svg_icon, icon_candidates, sanitize_name
from cdcc.compile.paths import clean_path
from cdcc.compile.runner import CompileRunner, as_requests, check_unique_formats

__all__ = [
    "CompileRunner",
    "as_requests",
    "check_unique_formats",
    "clean_path",
    "ensure_seekable",
    "find_svg_icon",
    "generate_outputs",
    "icon_candidates",
    "iter_outputs",
    "sanitize_name",
]
