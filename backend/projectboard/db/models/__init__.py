# import all models for Alembic
from projectboard.db.models.user import User
from projectboard.db.models.project import Project, project_type
from projectboard.db.models.member import Member
from projectboard.db.models.type import Type
from projectboard.db.models.category import Category
from projectboard.db.models.version import Version
from projectboard.db.models.work_package import WorkPackage
from projectboard.db.models.attachment import Attachment
