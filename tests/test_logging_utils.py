import logging

import numpy as np

from causemap.logging_utils import debug_log_call, safe_repr


def test_safe_repr_summarizes_arrays_and_truncates_sequences():
    assert safe_repr(np.zeros((0, 2))) == "ndarray(shape=(0, 2), dtype=float64)"
    big = safe_repr(np.arange(100, dtype=float))
    assert "min=0" in big and "max=99" in big
    assert safe_repr(list(range(20)), max_items=3) == "[0, 1, 2, ...]"


def test_debug_log_call_records_entry_and_exit(caplog):
    logger = logging.getLogger("causemap.test")

    @debug_log_call(logger)
    def add(a, b=1):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="causemap.test"):
        assert add(2, b=3) == 5

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0].startswith("Entering") and "args=[2]" in messages[0] and "b=3" in messages[0]
    assert messages[1].endswith("-> 5")
    assert debug_log_call(logger)(add) is add
