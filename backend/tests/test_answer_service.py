"""
Fake Stack Overflow Backend — Answer Service Tests
====================================================

What we test:
    ✅ Posting an answer links it to its question
    ✅ Answering an unknown question raises NotFoundError
    ✅ Invalid answer forms are rejected
    ✅ A question's answers come back newest first
"""

from uuid import uuid4

import pytest

from fakeso.exceptions import NotFoundError, ValidationError
from fakeso.schemas.answer import AnswerCreate
from fakeso.services.answer_service import answer_service
from fakeso.services.question_service import question_service


class TestAddAnswer:

    @pytest.mark.asyncio
    async def test_answer_is_linked_to_question(self, db_session, seeded_forum):
        qid = seeded_forum["q3"].id

        answer = await answer_service.add_answer(db_session, AnswerCreate(
            qid=qid, text="Return a new object from the updater.", ans_by="heidi",
        ))

        assert answer.ans_by == "heidi"
        assert answer.url == f"posts/answer/{answer.id}"
        question = await question_service.get_question(db_session, qid)
        assert question.answers == [answer.id]

    @pytest.mark.asyncio
    async def test_new_answer_removes_question_from_unanswered(self, db_session, seeded_forum):
        await answer_service.add_answer(db_session, AnswerCreate(
            qid=seeded_forum["q4"].id, text="Yes.", ans_by="ivan",
        ))

        unanswered = await question_service.unanswered(db_session)
        assert [q.id for q in unanswered] == [seeded_forum["q3"].id]

    @pytest.mark.asyncio
    async def test_unknown_question(self, db_session):
        with pytest.raises(NotFoundError):
            await answer_service.add_answer(db_session, AnswerCreate(
                qid=uuid4(), text="Orphan", ans_by="nobody",
            ))

    @pytest.mark.asyncio
    async def test_invalid_form(self, db_session, seeded_forum):
        with pytest.raises(ValidationError) as info:
            await answer_service.add_answer(db_session, AnswerCreate(
                qid=seeded_forum["q1"].id, text="see [docs](docs.example.com)", ans_by="",
            ))

        assert info.value.fields == {
            "text": "Invalid hyperlink",
            "ans_by": "Username cannot be empty",
        }


class TestListAnswers:

    @pytest.mark.asyncio
    async def test_answers_newest_first(self, db_session, seeded_forum):
        answers = await answer_service.answers_for_question(db_session, seeded_forum["q2"].id)
        assert [a.ans_by for a in answers] == ["grace", "erin"]

    @pytest.mark.asyncio
    async def test_unknown_question_has_no_answers(self, db_session):
        assert await answer_service.answers_for_question(db_session, uuid4()) == []

    @pytest.mark.asyncio
    async def test_list_all_answers(self, db_session, seeded_forum):
        answers = await answer_service.list_answers(db_session)
        assert [a.ans_by for a in answers] == ["erin", "frank", "grace"]
