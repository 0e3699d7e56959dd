"""Metric repository - Atomic counters in site_metrics"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import SiteMetric

PAGE_VIEWS = "page_views"


class MetricRepository:
    @staticmethod
    def get_value(db: Session, metric_name: str) -> int:
        metric = db.query(SiteMetric).filter(SiteMetric.metric_name == metric_name).first()
        return metric.value if metric else 0

    @staticmethod
    def increment(db: Session, metric_name: str) -> None:
        """Single UPDATE so concurrent visits never lose a count; creates the row on first use"""
        updated = (
            db.query(SiteMetric)
            .filter(SiteMetric.metric_name == metric_name)
            .update({SiteMetric.value: SiteMetric.value + 1}, synchronize_session=False)
        )
        if not updated:
            db.add(SiteMetric(metric_name=metric_name, value=1))
        try:
            db.commit()
        except IntegrityError:
            # Another request created the row first
            db.rollback()
            db.query(SiteMetric).filter(SiteMetric.metric_name == metric_name).update(
                {SiteMetric.value: SiteMetric.value + 1}, synchronize_session=False
            )
            db.commit()
