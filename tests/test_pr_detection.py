import uuid

import pytest
from sqlalchemy import select

from fitsnap.models import PersonalRecord
from fitsnap.services.pr_detection import beats_record, update_personal_record


@pytest.mark.parametrize(
    "weight, reps, expected",
    [
        (101, 1, True),
        (100, 6, True),
        (100, 5, False),
        (100, 4, False),
        (99, 20, False),
    ],
)
def test_beats_record(weight, reps, expected):
    record = PersonalRecord(user_id=uuid.uuid4(), exercise_id=uuid.uuid4(), weight=100, reps=5)

    assert beats_record(record, weight, reps) is expected


def test_anything_beats_no_record():
    assert beats_record(None, 2.5, 1) is True


@pytest.mark.asyncio
async def test_update_personal_record_keeps_one_row(db, seeded):
    alice, bench = seeded["alice"].id, seeded["bench"].id

    results = [
        await update_personal_record(db, alice, bench, 80, 5),
        await update_personal_record(db, alice, bench, 70, 10),
        await update_personal_record(db, alice, bench, 85, 3),
    ]
    await db.commit()

    assert results == [True, False, True]
    rows = (await db.execute(select(PersonalRecord))).scalars().all()
    assert len(rows) == 1
    assert (float(rows[0].weight), rows[0].reps) == (85, 3)


@pytest.mark.asyncio
async def test_records_are_per_user(db, seeded):
    bench = seeded["bench"].id

    assert await update_personal_record(db, seeded["alice"].id, bench, 80, 5) is True
    assert await update_personal_record(db, seeded["bob"].id, bench, 60, 5) is True
