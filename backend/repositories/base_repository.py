"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, List, Optional, Type, Any
from sqlalchemy.orm import Session

from exceptions import ValidationError
from utils.error_handlers import translate_storage_errors

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Repositories never commit; the caller's unit of work does.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    @translate_storage_errors("save")
    def save(self, obj: T) -> T:
        """
        Insert a new record and flush it so its ID is assigned.

        Args:
            obj: Model instance to insert

        Returns:
            The same instance, now persistent

        Raises:
            StorageError: On constraint violation or database failure
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def find_one(self, id: int) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return self.db.get(self.model, id)

    def find_all(self) -> List[T]:
        """
        Retrieve all records, ordered by ID.

        Returns:
            List of model instances
        """
        return self.db.query(self.model).order_by(self.model.id).all()

    def count(self) -> int:
        return self.db.query(self.model).count()

    def exists(self, id: int) -> bool:
        return self.db.query(self.model).filter(self.model.id == id).count() > 0

    def filter_by(self, **filters: Any) -> List[T]:
        """
        Filter records by exact-match criteria.

        Raises:
            ValidationError: If a key is not a mapped attribute of the model
        """
        unknown = sorted(key for key in filters if not hasattr(self.model, key))
        if unknown:
            raise ValidationError(
                f"Unknown {self.model.__name__} attributes: {', '.join(unknown)}",
                {key: filters[key] for key in unknown},
            )

        query = self.db.query(self.model)
        for key, value in filters.items():
            query = query.filter(getattr(self.model, key) == value)
        return query.order_by(self.model.id).all()
