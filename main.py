import argparse
import time
import schedule
import logging
import sys
from config.app_config import LOG_LEVEL, EXPIRY_SWEEP_MINUTES
from database.config import SessionLocal
from services.acceptance_workflow import AcceptanceWorkflow

# Configure Logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

def run_expiry_cycle():
    logging.info("Starting proposal expiry sweep...")
    db = SessionLocal()
    try:
        expired = AcceptanceWorkflow(db).expire_overdue()
        logging.info(f"Sweep complete. {expired} proposal(s) expired.")
    except Exception as e:
        logging.error(f"Error in expiry sweep: {e}")
    finally:
        db.close()

def start_scheduler(minutes: int):
    logging.info(f"Starting expiry scheduler (every {minutes} minutes)...")
    # Run once immediately
    run_expiry_cycle()

    schedule.every(minutes).minutes.do(run_expiry_cycle)

    while True:
        schedule.run_pending()
        time.sleep(30)

def main():
    parser = argparse.ArgumentParser(description="Linkp proposal expiry worker")
    parser.add_argument("--mode", choices=["once", "schedule"], default="schedule", help="Run once or schedule")
    parser.add_argument("--minutes", type=int, default=EXPIRY_SWEEP_MINUTES, help="Sweep interval in minutes")
    args = parser.parse_args()

    if args.mode == "schedule":
        start_scheduler(args.minutes)
    else:
        run_expiry_cycle()

if __name__ == "__main__":
    main()
