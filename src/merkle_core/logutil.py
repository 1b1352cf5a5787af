import logging
import re
from typing import Iterable, Optional


_DIGEST_HEX = re.compile(r"\b[0-9a-f]{64}\b")


class DigestAbbreviatingFilter(logging.Filter):
    """Shorten full 32-byte hex digests in log records to a short prefix."""

    def __init__(self, keep: int = 16):
        super().__init__()
        self.keep = max(1, keep)

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.getMessage())
        record.msg = _DIGEST_HEX.sub(lambda m: m.group(0)[: self.keep] + "...", msg)
        record.args = None
        return True


def setup_logging(
    level: int = logging.INFO,
    loggers: Iterable[str] = ("merkle_core", "merkle_cli"),
    keep: Optional[int] = None,
) -> None:
    if keep is None:
        from .settings import settings

        keep = settings.digest_preview
    logging.basicConfig(level=level)
    # Handler-level so records from child loggers (merkle_core.tree, ...) pass through it
    f = DigestAbbreviatingFilter(keep)
    for h in logging.getLogger().handlers:
        installed = [x for x in h.filters if isinstance(x, DigestAbbreviatingFilter)]
        if installed:
            for x in installed:
                x.keep = f.keep
        else:
            h.addFilter(f)
    for name in loggers:
        logging.getLogger(name).setLevel(level)
