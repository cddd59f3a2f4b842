from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from app.core.database import Base


class Job(Base):
    """
    Job posting offered by a company.

    `id` is the immutable row identity used by updates and deletes; `title`
    is a unique, renameable attribute used for lookups.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, unique=True, index=True)
    salary = Column(Integer, nullable=True)
    # NUMERIC comes back as Decimal (or str); the CRUD layer converts to float
    equity = Column(Numeric, nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )

    company = relationship("Company", back_populates="jobs")

    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity_max"),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company='{self.company_handle}')>"
