"""
Database layer using SQLAlchemy for the local draw history mirror
"""
from sqlalchemy import create_engine, Column, Integer, String
from sqlalchemy.orm import declarative_base, sessionmaker

from ssq_ai.config import DB_PATH, logger

Base = declarative_base()


class SsqDraw(Base):
    __tablename__ = 'ssq_draws'

    issue = Column(String, primary_key=True)
    draw_date = Column(String, nullable=False)
    red1 = Column(Integer, nullable=False)
    red2 = Column(Integer, nullable=False)
    red3 = Column(Integer, nullable=False)
    red4 = Column(Integer, nullable=False)
    red5 = Column(Integer, nullable=False)
    red6 = Column(Integer, nullable=False)
    blue_ball = Column(Integer, nullable=False)

    def get_red_balls(self):
        return [self.red1, self.red2, self.red3, self.red4, self.red5, self.red6]


# Database engine and session
engine = create_engine(f'sqlite:///{DB_PATH}', echo=False)
SessionLocal = sessionmaker(bind=engine)


def init_db(bind=None):
    """Initialize database tables"""
    try:
        Base.metadata.create_all(bind or engine)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def get_session():
    """Get database session"""
    return SessionLocal()
