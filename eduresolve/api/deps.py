# eduresolve/api/deps.py
from fastapi import Query

class CommonQueryParams:
    def __init__(self, skip: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500)):
        self.skip = skip
        self.limit = limit

pagination_params = CommonQueryParams
