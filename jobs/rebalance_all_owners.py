#!/usr/bin/env python3
"""
Workload Rebalance Job

Runs the global rebalance for every owner that has at least one project.
Owners are processed independently: a failed commit for one owner is logged
and the job moves on to the next.

Usage:
    python -m jobs.rebalance_all_owners

Cron setup (daily at 2 AM):
    0 2 * * * cd /path/to/taskflow-backend && python -m jobs.rebalance_all_owners
"""

import sys
import logging
from datetime import datetime, UTC
from typing import Any, Dict

from sqlalchemy.orm import Session

from api.workload.domain.services.rebalancer import WorkloadRebalancer
from api.workload.exceptions import RebalancingError
from api.workload.infra.db.uow import UnitOfWork
from models.taskflow import Project
from settings.database import get_db

logger = logging.getLogger(__name__)


def rebalance_all_owners(db: Session) -> Dict[str, Any]:
    owner_ids = [
        row[0] for row in
        db.query(Project.created_by_id).distinct().order_by(Project.created_by_id).all()
    ]

    results = []
    for owner_id in owner_ids:
        try:
            response = WorkloadRebalancer(UnitOfWork(db)).rebalance_all_projects(owner_id)
            results.append({
                "owner_id": owner_id,
                "status": "success",
                "moved": response.moved_count,
                "unresolved": len(response.unresolved),
            })
        except RebalancingError as e:
            logger.error(f"Rebalance failed for owner_id={owner_id}: {str(e)}")
            results.append({"owner_id": owner_id, "status": "error", "error": str(e)})

    return {
        "total_owners": len(owner_ids),
        "successful": sum(1 for r in results if r["status"] == "success"),
        "failed": sum(1 for r in results if r["status"] == "error"),
        "moved": sum(r.get("moved", 0) for r in results),
        "results": results,
    }


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    logger.info("=" * 80)
    logger.info("Starting workload rebalance job")
    logger.info(f"Job started at: {datetime.now(UTC).isoformat()}")
    logger.info("=" * 80)

    db: Session = next(get_db())

    try:
        result = rebalance_all_owners(db)

        logger.info("=" * 80)
        logger.info("Job completed")
        logger.info(f"Job finished at: {datetime.now(UTC).isoformat()}")
        logger.info(f"Owners: {result['total_owners']}")
        logger.info(f"Successful: {result['successful']}")
        logger.info(f"Failed: {result['failed']}")
        logger.info(f"Tasks moved: {result['moved']}")
        logger.info("=" * 80)

        if result['failed'] > 0:
            sys.exit(1)

    finally:
        db.close()


if __name__ == "__main__":
    main()
