# main.py
import argparse
import json
import logging
import os
import sys
from dotenv import load_dotenv

from bot import VirtualChurchBot
from scheduler import ServiceScheduler

# Load environment variables
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("virtual_church")


def setup_command(scheduler: ServiceScheduler):
    job = scheduler.setup_cron()
    print("Cron job configuration ready. Add this to your cron jobs:")
    print(json.dumps(job, indent=2))

def test_command(scheduler: ServiceScheduler):
    record = scheduler.test_service()
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))

def status_command(scheduler: ServiceScheduler):
    bot = scheduler.bot
    bot.initialize()
    status = bot.get_status()
    status["nextService"] = status["nextService"].isoformat()
    status["prayers"] = bot.prayer_queue.get_stats()
    print(json.dumps(status, indent=2))

COMMANDS = {
    "setup": setup_command,
    "test": test_command,
    "status": status_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="Virtual Church Moltbot - weekly service automation",
    )
    parser.add_argument("command", choices=sorted(COMMANDS), help="setup: print the cron job, test: run one service now, status: show queue and next service")
    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        scheduler = ServiceScheduler(VirtualChurchBot())
        COMMANDS[args.command](scheduler)
    except Exception:
        logger.exception(f"Command {args.command!r} failed")
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
