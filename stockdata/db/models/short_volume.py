from sqlalchemy import Column, BigInteger, Numeric
from .base import Base
from .data_point import StockDataPoint


class ShortVolume(StockDataPoint, Base):
    __tablename__ = "short_volume"
    dataset = "short_volume"

    # Totals
    rt = Column(BigInteger, nullable=False, default=0)  # total volume
    st = Column(BigInteger, nullable=False, default=0)  # short volume
    lt = Column(BigInteger, nullable=False, default=0)  # long volume
    fs = Column(BigInteger, nullable=False, default=0)
    fse = Column(BigInteger, nullable=False, default=0)

    # Per venue
    xnas = Column(BigInteger, nullable=False, default=0)
    xphl = Column(BigInteger, nullable=False, default=0)
    xnys = Column(BigInteger, nullable=False, default=0)
    arcx = Column(BigInteger, nullable=False, default=0)
    xcis = Column(BigInteger, nullable=False, default=0)
    xase = Column(BigInteger, nullable=False, default=0)
    xchi = Column(BigInteger, nullable=False, default=0)
    edgx = Column(BigInteger, nullable=False, default=0)
    bats = Column(BigInteger, nullable=False, default=0)
    edga = Column(BigInteger, nullable=False, default=0)
    baty = Column(BigInteger, nullable=False, default=0)

    # Derived
    short_volume_percent = Column(Numeric(18, 6), nullable=False, default=0)
