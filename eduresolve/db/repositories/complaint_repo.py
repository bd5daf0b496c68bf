from eduresolve.db.models import Complaint
from eduresolve.db.repositories.base import BaseRepository
from eduresolve.db.store import RecordStore

complaint_repo = BaseRepository[Complaint](RecordStore.list_complaints)
