from .display import format_banner, format_duration_ns, format_integer, truncate_path_to_fit

__all__ = ["format_banner", "format_duration_ns", "format_integer", "truncate_path_to_fit"]
