# Persistence implementations
from hotel_nova.repositories.sqlalchemy_repositories import (
    SqlAlchemyRoomRepository,
    SqlAlchemyGuestRepository,
    SqlAlchemyReservationRepository,
)
from hotel_nova.repositories.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    'SqlAlchemyRoomRepository',
    'SqlAlchemyGuestRepository',
    'SqlAlchemyReservationRepository',
    'SqlAlchemyUnitOfWork',
]
