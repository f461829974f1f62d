from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.schema import FetchedValue
from workshop_mgmt.database import Base


class AreaInCharge(Base):
    """Person supervising one or more areas and their workshop in-charges"""
    __tablename__ = "area_incharge"

    id = Column("ID", Integer, primary_key=True, autoincrement=False)
    first_name = Column("First Name", String, nullable=False)
    middle_name = Column("Middle Name", String, nullable=True)
    last_name = Column("Last Name", String, nullable=False)


class Area(Base):
    """Named area supervised by exactly one area in-charge"""
    __tablename__ = "area"

    area_name = Column(String, primary_key=True)  # stored trimmed, case as given
    ic = Column(Integer, ForeignKey("area_incharge.ID", ondelete="RESTRICT"), nullable=False, index=True)


class WorkshopIC(Base):
    """Workshop in-charge, supervised by an area in-charge"""
    __tablename__ = "workshop_ic"

    id = Column(Integer, primary_key=True, autoincrement=False)
    fname = Column(String, nullable=False)
    mname = Column(String, nullable=True)
    lname = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    area_ic = Column(Integer, ForeignKey("area_incharge.ID", ondelete="RESTRICT"), nullable=False, index=True)


class Workshop(Base):
    """Workshop located in an area; score is maintained by a store trigger"""
    __tablename__ = "workshop"
    __table_args__ = (
        CheckConstraint("recovery IN ('yes', 'no')", name="ck_workshop_recovery"),
    )

    wk_code = Column(Integer, primary_key=True, autoincrement=False)
    wk_name = Column(String, nullable=False)
    area = Column(String, ForeignKey("area.area_name", ondelete="RESTRICT"), nullable=False, index=True)
    manpower = Column(Integer, nullable=False)
    customer_visits = Column(Integer, nullable=True)
    recovery = Column(String(3), nullable=True)
    score = Column(Numeric(10, 2), FetchedValue(), server_onupdate=FetchedValue(), nullable=True)


class Manages(Base):
    """Many-to-many link between workshops and their in-charges"""
    __tablename__ = "manages"

    wk_code = Column(Integer, ForeignKey("workshop.wk_code", ondelete="CASCADE"), primary_key=True)
    ic_id = Column(Integer, ForeignKey("workshop_ic.id", ondelete="RESTRICT"), primary_key=True, index=True)


class Revenue(Base):
    """Quarterly revenue of a workshop; profit is maintained by a store trigger"""
    __tablename__ = "revenue"
    __table_args__ = (
        CheckConstraint("quarter BETWEEN 1 AND 4", name="ck_revenue_quarter"),
    )

    wk_code = Column(Integer, ForeignKey("workshop.wk_code", ondelete="CASCADE"), primary_key=True)
    year = Column(Integer, primary_key=True)
    quarter = Column(Integer, primary_key=True)
    total_sales = Column(Numeric(14, 2), nullable=False)
    service_cost = Column(Numeric(14, 2), nullable=True)
    profit = Column(Numeric(14, 2), FetchedValue(), server_onupdate=FetchedValue(), nullable=True)


# Dependency order used by schema import and export
ALL_TABLES = ["area_incharge", "area", "workshop_ic", "workshop", "manages", "revenue"]
