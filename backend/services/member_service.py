"""
Member Service

Registration and lookup of members.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from database import unit_of_work
from exceptions import EntityNotFoundError
from models import Member
from repositories.member_repository import MemberRepository
from services.interfaces import IMemberService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class MemberService(IMemberService):

    def __init__(self, db: Session):
        self.db = db
        self.member_repo = MemberRepository(db)

    @log_operation("join_member")
    def join(self, member: Member) -> int:
        with unit_of_work(self.db):
            self.member_repo.save(member)
            member_id = member.id
        logger.info(f"Member {member_id} joined")
        return member_id

    def find_members(self) -> List[Member]:
        return self.member_repo.find_all()

    def find_one(self, member_id: int) -> Optional[Member]:
        return self.member_repo.find_one(member_id)

    @log_operation("update_member")
    def update(self, member_id: int, name: str) -> Member:
        with unit_of_work(self.db):
            member = self.member_repo.find_one(member_id)
            if member is None:
                raise EntityNotFoundError("Member", member_id)
            member.name = name
        return member
