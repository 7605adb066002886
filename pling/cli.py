"""Minimal runner to push a single notification.

Usage: pling-send --token REGISTRATION_ID --body "Hello" [--kind android]

C2DM credentials come from the environment (see `pling.config`). With
--dry-run no gateway talks to the network; the delivery is recorded by a
NoOpGateway and printed.
"""
import argparse
import json
import logging
import sys

from pling.config import c2dm_configuration_from_env, load_env
from pling.context import PlingContext
from pling.deferred import Pending
from pling.dispatcher import Dispatcher
from pling.exceptions import PlingError
from pling.gateway import C2DMGateway, NoOpGateway
from pling.middleware import MetricsMiddleware
from pling import metrics
from pling.models import Device, Message


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Send a push notification through pling')
    parser.add_argument('--token', required=True, help='Device registration id / token')
    parser.add_argument('--kind', default='android', help='Device kind (default: android)')
    parser.add_argument('--body', required=True, help='Message body')
    parser.add_argument('--badge', type=int, default=None)
    parser.add_argument('--sound', default=None)
    parser.add_argument('--subject', default=None)
    parser.add_argument('--payload', help='JSON object of extra key/value pairs', default=None)
    parser.add_argument('--dry-run', action='store_true', help='Record the delivery instead of sending it')
    parser.add_argument('--json', action='store_true', help='Emit a JSON result instead of a human-readable line')
    parser.add_argument('--verbose', action='store_true', help='Log pipeline events to stderr')
    return parser


def build_context(args) -> PlingContext:
    if args.dry_run:
        gateway = NoOpGateway({'handles': [args.kind]})
    else:
        gateway = Pending(C2DMGateway, (c2dm_configuration_from_env(),))
    return PlingContext(gateways=[gateway], middlewares=[MetricsMiddleware])


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    load_env()

    payload = json.loads(args.payload) if args.payload else None
    message = Message(args.body, badge=args.badge, sound=args.sound, subject=args.subject, payload=payload)
    device = Device(args.token, args.kind)

    try:
        context = build_context(args)
        Dispatcher(context).deliver(message, device)
    except PlingError as exc:
        if args.json:
            print(json.dumps({'status': 'ERROR', 'error_type': type(exc).__name__, 'error': str(exc)}))
        else:
            print(f'{type(exc).__name__}: {exc}', file=sys.stderr)
        return 1

    status = 'DRY_RUN' if args.dry_run else 'SENT'
    if args.json:
        print(json.dumps({'status': status, 'kind': args.kind, 'metrics': metrics.snapshot()}, default=str))
    else:
        print(f'{status}: {args.body!r} -> {args.kind}:{args.token}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
