from sqlalchemy.orm import Session
from projectboard.db.models.type import Type
from projectboard.schemas.admin import TypeIn
from projectboard.services.schema import validate_attribute_groups

def list_types(db: Session):
    return db.query(Type).order_by(Type.position, Type.id).all()

def get_type(db: Session, type_id: int) -> Type | None:
    return db.query(Type).filter(Type.id == type_id).one_or_none()

def create_type(db: Session, data: TypeIn) -> Type:
    groups = validate_attribute_groups(data.attribute_groups) if data.attribute_groups else None
    ty = Type(name=data.name, position=data.position, is_milestone=data.is_milestone, attribute_groups=groups)
    db.add(ty)
    db.commit()
    db.refresh(ty)
    return ty

def set_attribute_groups(db: Session, ty: Type, groups: list[dict] | None) -> Type:
    ty.attribute_groups = validate_attribute_groups(groups) if groups else None
    db.commit()
    db.refresh(ty)
    return ty
