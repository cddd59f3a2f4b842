from sqlalchemy import CheckConstraint, Column, Integer, String, Text
from sqlalchemy.orm import relationship
from app.core.database import Base


class Company(Base):
    """Company that posts jobs, identified by its short handle."""
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False, default="")
    logo_url = Column(Text, nullable=True)

    # Relationships
    jobs = relationship("Job", back_populates="company", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees_non_negative"),
    )

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
