import logging


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def redact(data: bytes, keep: int = 4) -> str:
    """Short hex preview of a byte string for log lines, never the full content."""
    if len(data) <= keep:
        return data.hex()
    return f"{data[:keep].hex()}…({len(data)} bytes)"
