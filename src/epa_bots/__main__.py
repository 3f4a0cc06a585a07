"""Command-line runner for the EPA Bienestar bots.

Usage:
    # Run the HTA alert bot on an Observation against Medplum
    python -m epa_bots alert observation.json

    # Same, against a local JSON store, without sending email
    python -m epa_bots alert observation.json --store-dir data/fhir --no-email

    # Map a measurement and print it
    python -m epa_bots measure "blood pressure" Patient/123 80 120 --dry-run

Environment Variables:
    MEDPLUM_CLIENT_ID, MEDPLUM_CLIENT_SECRET, MEDPLUM_BASE_URL
    AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
    FROM_EMAIL, ADMIN_EMAIL, EPA_NOTIFICATION_MODE
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .bots import BloodPressureAlertBot, MeasurementBot
from .config import get_config
from .fhir import FhirJsonStore, MedplumClient
from .fhir.encoding import dumps
from .mail import SesMailSender
from .measurements import MeasurementType, build_observation
from .notifier import HtaNotifier, NotificationMode
from .protocols import ClinicalDataStore
from .schemas import BotEvent

logger = logging.getLogger("epa_bots")


def _build_store(store_dir: str | None) -> ClinicalDataStore:
    if store_dir:
        return FhirJsonStore(store_dir)
    return MedplumClient(get_config())


async def run_alert(args: argparse.Namespace) -> int:
    config = get_config()
    store = _build_store(args.store_dir)
    mailer = None if args.no_email else SesMailSender(config)
    notifier = HtaNotifier(store, config, mailer=mailer, mode=args.mode)

    observation = json.loads(Path(args.observation).read_text(encoding="utf-8"))
    await BloodPressureAlertBot(store, notifier).handle(BotEvent(input=observation))
    return 0


async def run_measure(args: argparse.Namespace) -> int:
    if args.dry_run:
        observation = build_observation(args.type, args.subject, args.value, args.second_value)
        print(dumps(observation, indent=2))
        return 0

    event = BotEvent(
        input={
            "type": args.type,
            "subject": args.subject,
            "firstValue": args.value,
            "secondValue": args.second_value,
        }
    )
    created = await MeasurementBot(_build_store(args.store_dir)).handle(event)
    if created is None:
        print(f"Unrecognised measurement type: {args.type}", file=sys.stderr)
        return 1
    print(f"Created Observation/{created.get('id')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="epa-bots", description="EPA Bienestar FHIR bots")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    alert = subparsers.add_parser("alert", help="Run the hypertension alert bot on an Observation")
    alert.add_argument("observation", help="Path to an Observation JSON file")
    alert.add_argument("--store-dir", default=None, help="Use a local FHIR JSON store instead of Medplum")
    alert.add_argument(
        "--mode",
        choices=[m.value for m in NotificationMode],
        default=None,
        help="Notification mode (default: EPA_NOTIFICATION_MODE or 'email')",
    )
    alert.add_argument("--no-email", action="store_true", help="Do not send any email")

    measure = subparsers.add_parser("measure", help="Record a vital-sign measurement")
    measure.add_argument("type", help=f"One of: {', '.join(m.value for m in MeasurementType)}")
    measure.add_argument("subject", help="Patient reference, e.g. Patient/123")
    measure.add_argument("value", help="Measurement value (diastolic for blood pressure)")
    measure.add_argument("second_value", nargs="?", default=None, help="Systolic value")
    measure.add_argument("--store-dir", default=None, help="Use a local FHIR JSON store instead of Medplum")
    measure.add_argument("--dry-run", action="store_true", help="Print the Observation without saving it")

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    runner = run_alert if args.command == "alert" else run_measure
    return asyncio.run(runner(args))


if __name__ == "__main__":
    sys.exit(main())
