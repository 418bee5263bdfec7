# coding=utf-8
import logging
import time
from functools import wraps


def cal_time(log_obj: logging.Logger, logger_level="info"):
    def _cal_time(func):
        @wraps(func)
        def _wrap(*args, **kwargs):
            t0 = time.time()
            res = func(*args, **kwargs)
            t1 = time.time()
            msg = f"function named '{func.__name__}' cost {t1 - t0:.4f}s"
            getattr(log_obj, logger_level)(msg)
            return res

        return _wrap

    return _cal_time
