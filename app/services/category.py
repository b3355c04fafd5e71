"""Category CRUD."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFound
from app.models.category import Category


class CategoryService:
    """Handles category listing and admin maintenance. Names are unique."""

    def list_categories(self, db: Session) -> list[Category]:
        return db.query(Category).order_by(Category.name.asc()).all()

    def get_category(self, db: Session, category_id: int) -> Category:
        category = db.get(Category, category_id)
        if not category:
            raise NotFound("Category not found")
        return category

    def create_category(self, db: Session, name: str, description: str | None = None) -> Category:
        name = name.strip()
        if db.query(Category).filter(Category.name == name).first():
            raise ConflictError("Category with this name already exists")

        category = Category(name=name, description=description)
        db.add(category)
        self._commit(db)
        db.refresh(category)
        return category

    def update_category(self, db: Session, category_id: int, changes: dict) -> Category:
        category = self.get_category(db, category_id)

        name = changes.get("name")
        if name:
            name = name.strip()
            if name != category.name and db.query(Category).filter(Category.name == name).first():
                raise ConflictError("Category with this name already exists")
            category.name = name
        if "description" in changes:
            category.description = changes["description"]

        self._commit(db)
        db.refresh(category)
        return category

    def delete_category(self, db: Session, category_id: int) -> None:
        category = self.get_category(db, category_id)
        db.delete(category)
        db.commit()

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Category with this name already exists") from None


_category_service: CategoryService | None = None


def get_category_service() -> CategoryService:
    """Get singleton category service instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
