# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import os
import sys
from typing import Optional

import yaml

from kubeassembler import __version__
from kubeassembler.config import load_settings
from kubeassembler.exceptions import ManifestError
from kubeassembler.manifests import Assembler, map_to_flags, to_yaml_stream
from kubeassembler.plan import load_plan, parse_set_args, run_plan

logger = logging.getLogger(__name__)

_USAGE_EXAMPLES = """
Examples:
# Render a plan to stdout
kube-assembler render deploy/api.yaml

# Render a templated plan for staging and write the stream to a file
kube-assembler render deploy/api.yaml.j2 \\
    --set env=staging \\
    --set image.tag=1.4.2 \\
    --config deploy/settings.yaml \\
    --output build/api.yaml

# Print container flags
kube-assembler flags log.level=info server.http-listen-port=8080

# Same, with GNU-style "--" flags
kube-assembler flags --long-flags log.level=info
"""


def _build_common_cli_parser() -> argparse.ArgumentParser:
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    common_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file overriding assembler settings (service_name_format, secret_default_mode, api_versions, ...).",
    )
    return common_parser


def configure_parser(parser):
    common_cli_parser = _build_common_cli_parser()
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    render_parser = subparsers.add_parser(
        "render",
        parents=[common_cli_parser],
        help="Render a plan file into a multi-document YAML stream.",
        description="Render a plan file into a multi-document YAML stream.",
        epilog=_USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    render_parser.add_argument("plan", help="Plan file (.yaml, or .yaml.j2 to render with Jinja2 first).")
    render_parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Template variable for .j2 plans, dotted keys nest (e.g. image.tag=1.4.2). Repeatable.",
    )
    render_parser.add_argument("--output", "-o", default=None, help="Write the stream to this file instead of stdout.")

    flags_parser = subparsers.add_parser(
        "flags",
        parents=[common_cli_parser],
        help="Print KEY=VALUE pairs as command line flags.",
        description="Print KEY=VALUE pairs as command line flags, one per line.",
    )
    flags_parser.add_argument("pairs", nargs="*", metavar="KEY=VALUE")
    prefix_group = flags_parser.add_mutually_exclusive_group()
    prefix_group.add_argument("--prefix", default=None, help="Flag prefix (default from settings, '-').")
    prefix_group.add_argument(
        "--long-flags",
        dest="prefix",
        action="store_const",
        const="--",
        help="Use '--' as the flag prefix.",
    )


def _write_output(text: str, output: Optional[str]) -> None:
    if not output:
        sys.stdout.write(text)
        return
    directory = os.path.dirname(os.path.abspath(output))
    os.makedirs(directory, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Wrote %s", output)


def _run_render_mode(args, assembler: Assembler) -> None:
    variables = parse_set_args(args.set or [])
    plan = load_plan(args.plan, variables)
    resources = run_plan(plan, assembler)
    logger.info("Rendered %d resource(s) from %s", len(resources), args.plan)
    _write_output(to_yaml_stream(resources), args.output)


def _run_flags_mode(args, assembler: Assembler) -> None:
    mapping = {}
    for pair in args.pairs:
        if "=" not in pair:
            raise ManifestError(f"Expected KEY=VALUE, got '{pair}'")
        key, value = pair.split("=", 1)
        mapping[key] = value
    prefix = args.prefix if args.prefix is not None else assembler.settings.flag_prefix
    for flag in map_to_flags(mapping, prefix):
        print(flag)


def main(args) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s",
    )

    try:
        settings = load_settings(args.config)
        assembler = Assembler(settings=settings)
        if args.mode == "render":
            _run_render_mode(args, assembler)
        elif args.mode == "flags":
            _run_flags_mode(args, assembler)
    except (FileNotFoundError, ManifestError, yaml.YAMLError) as exc:
        logger.error("%s", exc)
        return 2
    return 0


def run(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="kube-assembler",
        description="Assemble Kubernetes manifests from declarative plans",
        epilog=_USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    configure_parser(parser)
    args = parser.parse_args(argv)
    sys.exit(main(args))


if __name__ == "__main__":
    run()
