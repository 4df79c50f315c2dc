"""
Run Inactivity Sweep

Marks every active student without a logsheet in the last 10 days as
inactive. Meant to be run daily from cron or a container scheduler.

Usage:
    cd apps/api
    python scripts/run_inactivity_sweep.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wil_api.core.database import close_db  # noqa: E402
from wil_api.modules.students.sweep import sweep_inactive_students  # noqa: E402


async def main() -> int:
    try:
        result = await sweep_inactive_students()
    finally:
        await close_db()

    print(f"Checked {result['checked']} active students")
    print(f"  Set inactive: {len(result['updated_students'])}")
    for student_number in result["updated_students"]:
        print(f"    - {student_number}")

    if result["failed_students"]:
        print(f"  Failed: {len(result['failed_students'])}")
        for failure in result["failed_students"]:
            print(f"    - {failure['student_number']}: {failure['error']}")
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    sys.exit(asyncio.run(main()))
