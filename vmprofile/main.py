# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description:
FileName：main.py
Create Date: 2025/6/6 15:00
Notes:
    vmprofile --trace-file trace.jsonl --output-type pprof --output-file out.pb.gz
"""
import argparse
import os
import sys
import traceback
from typing import Dict, List, Optional

from vmprofile.dataloader.trace_reader import load_folded_profile, load_trace
from vmprofile.errors import ProfilerError
from vmprofile.model.event import Category
from vmprofile.process.call_tree import build_call_tree
from vmprofile.process.collapse import collapse
from vmprofile.process.profile import profile_from_tree
from vmprofile.report.summary import format_summary, function_summary
from vmprofile.util.config import load_config
from vmprofile.util.constant import OutputType
from vmprofile.util.logging_utils import get_default_logger
from vmprofile.util.utils import cal_time
from vmprofile.writers.flamegraph import write_flamegraph
from vmprofile.writers.pprof import write_pprof

logger = get_default_logger(__name__)

HIDEABLE_CATEGORIES = [category.value for category in Category.trace_categories()]


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(prog="vmprofile",
                                     description="Turn a VM call/return trace into a flamegraph or a pprof profile.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--trace-file", help="JSON-lines call/return event stream")
    source.add_argument("--profile-file", help="already folded profile (`a;b;c cost` lines)")
    parser.add_argument("--output-type", choices=OutputType.choices(), default=None,
                        help="output format, flamegraph by default")
    parser.add_argument("--output-file", required=True, help="path to write the output file")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--hide-category", action="append", choices=HIDEABLE_CATEGORIES, default=None,
                        help="fold frames of this category into their caller, may be repeated")
    parser.add_argument("--min-cost", type=int, default=None, help="drop stacks cheaper than this")
    parser.add_argument("--summary", type=int, default=None, metavar="N",
                        help="log the N most expensive functions")
    parser.add_argument("--no-build", action="store_true", default=False,
                        help="do not rebuild the program before profiling")
    return parser.parse_args(argv)


def merge_options(args, config: Dict) -> Dict:
    options = dict(config)
    if args.output_type is not None:
        options["output_type"] = args.output_type
    if args.hide_category is not None:
        options["hide_categories"] = args.hide_category
    if args.min_cost is not None:
        options["min_cost"] = args.min_cost
    if args.summary is not None:
        options["summary_top"] = args.summary
    options["hide_categories"] = [Category(value) for value in options["hide_categories"]]
    return options


@cal_time(logger)
def load_call_tree(args, options):
    if args.trace_file:
        events = load_trace(args.trace_file)
        return build_call_tree(events, merge_repeated_calls=options["merge_repeated_calls"])
    return load_folded_profile(args.profile_file).to_call_tree()


@cal_time(logger)
def render_output(collapsed_root, options) -> bytes:
    profile = profile_from_tree(collapsed_root,
                                hide_categories=options["hide_categories"],
                                min_cost=options["min_cost"])
    logger.info(f"profile has {len(profile)} stacks over {len(profile.identities())} functions")
    if options["output_type"] == OutputType.pprof:
        return write_pprof(profile, options["sample_type"], options["sample_unit"])
    return write_flamegraph(profile).encode("utf-8")


def run(args) -> int:
    options = merge_options(args, load_config(args.config))
    if args.no_build:
        logger.info("--no-build given, using the existing trace")

    call_tree = load_call_tree(args, options)
    collapsed_root = collapse(call_tree)
    logger.info(f"total cost {collapsed_root.cumulative_cost}")

    if options["summary_top"] > 0:
        logger.info("top functions:\n" + format_summary(function_summary(collapsed_root), options["summary_top"]))

    payload = render_output(collapsed_root, options)
    output_dir = os.path.dirname(os.path.abspath(args.output_file))
    os.makedirs(output_dir, exist_ok=True)
    with open(args.output_file, "wb") as f:
        f.write(payload)

    if options["output_type"] == OutputType.pprof:
        logger.info(f"Profile file written to {args.output_file}")
    else:
        logger.info(f"Flamegraph written to {args.output_file}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except (ProfilerError, ValueError, OSError) as e:
        logger.error(f"profiling failed: {e}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
