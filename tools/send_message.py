from __future__ import annotations

import argparse
import logging
import sys

from messenger.client import MessengerClient, load_messenger_config


def _email_recipients(addresses: list[str]) -> list[dict[str, str]]:
    return [{"email": a} for a in addresses if a]


def _run(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    client = MessengerClient(load_messenger_config(args.config))
    to = args.to[0] if len(args.to) == 1 else list(args.to)
    if args.cmd == "chat":
        response = client.send_chat(to, args.message)
    elif args.cmd == "sms":
        response = client.send_sms(to, args.message)
    else:
        response = client.send_email(
            _email_recipients(args.to),
            args.subject,
            args.message,
            cc=_email_recipients(args.cc) or None,
            bcc=_email_recipients(args.bcc) or None,
        )

    if response is None:
        for err in client.get_errors() or ["No response from messenger service"]:
            print(err, file=sys.stderr)
        return 1
    print(response.decode("utf-8", errors="replace"))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Send one notification through the messenger service.")
    p.add_argument("cmd", choices=["chat", "sms", "email"], help="Message category")
    p.add_argument("--config", type=str, default="messenger.json", help="Path to JSON config")
    p.add_argument("--to", action="append", required=True, help="Recipient (repeatable)")
    p.add_argument("--message", type=str, required=True, help="Message text (HTML for email)")
    p.add_argument("--subject", type=str, default=None, help="Email subject")
    p.add_argument("--cc", action="append", default=[], help="Email cc address (repeatable)")
    p.add_argument("--bcc", action="append", default=[], help="Email bcc address (repeatable)")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = p.parse_args(argv)
    if args.cmd == "email" and args.subject is None:
        p.error("--subject is required for email")
    return _run(args)


if __name__ == "__main__":
    raise SystemExit(main())
