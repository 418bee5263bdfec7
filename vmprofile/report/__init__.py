# coding=utf-8

from .summary import category_summary, format_summary, function_summary
