"""Random integers for naming acceptance test resources."""

from __future__ import annotations

import random
from datetime import datetime


def acc_rand_time_int() -> int:
    """Return an 18 digit integer: YYMMddHHmmss, hundredths, then 4 random digits."""
    now = datetime.now()
    stamp = now.strftime("%y%m%d%H%M%S") + f"{now.microsecond // 10000:02d}"
    postfix = "".join(random.choices("0123456789", k=4))
    return int(stamp + postfix)