import argparse
import sys
from typing import Optional

import importlib_resources

import haproxycfg
from haproxycfg._output import TerminalBackend, output
from haproxycfg.manifest import load_manifest
from haproxycfg.utils import find_ip


def render(manifest, predict_only):
    if predict_only:
        ACTION = "PREDICTION"
        SUCCESS_FORMAT = {"purple": True}
    else:
        ACTION = "RENDERING"
        SUCCESS_FORMAT = {"green": True}
    output.section("{} {}".format(ACTION, manifest))
    try:
        catalog = load_manifest(manifest)
        changed = catalog.write(predict_only=predict_only)
    except haproxycfg.ReportingException as e:
        e.report()
        output.section("{} FAILED".format(ACTION), red=True)
        return 1
    except Exception:
        output.error("Unexpected exception", exc_info=sys.exc_info())
        output.section("{} FAILED".format(ACTION), red=True)
        return 1
    for target in catalog.concat.targets():
        output.tabular(
            "changed" if target in changed else "unchanged", target)
    output.section("{} FINISHED".format(ACTION), **SUCCESS_FORMAT)
    return 0


def resolve(hostname):
    result = find_ip(hostname)
    if not result:
        output.error("{}: not found".format(hostname))
        return 1
    output.line(result.address)
    return 0


def main(args: Optional[list] = None) -> None:
    version = (
        importlib_resources.files("haproxycfg")
        .joinpath("version.txt")
        .read_text()
        .strip()
    )
    parser = argparse.ArgumentParser(
        description=(
            "haproxycfg v{}: assemble HAProxy log-forward configuration"
        ).format(version),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.set_defaults(func=parser.print_usage)

    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable debug mode."
    )

    subparsers = parser.add_subparsers()

    p = subparsers.add_parser(
        "render", help="Render the configuration files of a manifest.")
    p.add_argument(
        "-P",
        "--predict-only",
        action="store_true",
        help="Only show what would change. Do not write anything.",
    )
    p.add_argument("manifest", help="Manifest to render.")
    p.set_defaults(func=render)

    p = subparsers.add_parser(
        "find-ip", help="Resolve a hostname to an IP address.")
    p.add_argument("hostname", help="Hostname to resolve.")
    p.set_defaults(func=resolve)

    args = parser.parse_args(args)

    output.enable_debug = args.debug

    if args.func.__name__ == "print_usage":
        args.func()
        sys.exit(1)

    output.backend = TerminalBackend()

    func_args = dict(args._get_kwargs())
    del func_args["func"]
    del func_args["debug"]
    sys.exit(args.func(**func_args))
