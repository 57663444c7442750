"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time


class ConvertUtils:
    @staticmethod
    def seconds_to_clock(seconds: float) -> str:
        """
        Convert elapsed seconds to HH:MM:SS (hours are not wrapped).
        """
        total = max(0, int(seconds))
        hours, remainder = divmod(total, 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"

    @staticmethod
    def timestamp_prefix(timestamp: float = None) -> str:
        """
        '[15:04:05] ' style prefix for console lines, local time.
        """
        if timestamp is None:
            timestamp = time.time()
        return time.strftime("[%H:%M:%S] ", time.localtime(timestamp))

    @staticmethod
    def fit_width(line: str, width: int) -> str:
        """
        Pad a single line with spaces so it fully overwrites a previous line
        of `width - 1` columns. Longer lines are left untouched.
        """
        return line + " " * max(0, width - len(line) - 1)

    @staticmethod
    def tail(text: str, max_len: int) -> str:
        """
        Keep the last `max_len` characters, the end of a path being the interesting part.
        """
        if max_len <= 0:
            return ""
        if len(text) <= max_len:
            return text
        return text[len(text) - max_len:]
