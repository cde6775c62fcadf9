from __future__ import annotations

from datetime import timedelta
import json
import os
import logging

import pytest

from studymate.core.errors import DecodeError, ErrorKind, RepositoryIOError
from studymate.domain.models import Assignment, Course, Note, Snapshot, Status
from studymate.repositories.base import SnapshotRepository
from studymate.services.study_service import UNRESOLVED, StudyMateService

from conftest import TODAY


def _course(course_id: int = 101, credits: int = 3) -> Course:
    return Course(course_id, f"Course {course_id}", "Dr. Smith", "Fall 2025", credits, "")


def _assignment(assignment_id: int, course_id: int = 101, days: int = 1, priority: int = 1, status: str = Status.PENDING) -> Assignment:
    return Assignment(assignment_id, course_id, f"A{assignment_id}", "", TODAY + timedelta(days=days), priority, status)


class _BrokenRepository(SnapshotRepository):
    name = "broken"

    def __init__(self) -> None:
        self.calls = 0

    def save(self, snapshot: Snapshot) -> None:
        self.calls += 1
        raise RepositoryIOError("disk full")

    def load(self) -> Snapshot:
        raise RepositoryIOError("unreachable")


class _RecordingRepository(SnapshotRepository):
    def __init__(self, name: str, log: list) -> None:
        self.name = name
        self.log = log
        self.saved: list[Snapshot] = []

    def save(self, snapshot: Snapshot) -> None:
        self.log.append(self.name)
        self.saved.append(snapshot)

    def load(self) -> Snapshot:
        return Snapshot()


# -------------------------- admission --------------------------
def test_add_course_then_lookup(service):
    course = _course()
    assert service.add_course(course).ok
    assert service.get_course(101) is course
    assert service.get_courses() == [course]


def test_duplicate_course_rejected_without_side_effects(service):
    service.add_course(_course())
    outcome = service.add_course(Course(101, "Other", "Dr. X", "Spring", 4, ""))
    assert not outcome.ok
    assert outcome.error is ErrorKind.DUPLICATE_ID
    assert [c.id for c in service.get_courses()] == [101]
    assert service.get_course(101).name == "Course 101"


def test_assignment_for_unknown_course_rejected(service):
    outcome = service.add_assignment(_assignment(5, course_id=999))
    assert outcome.error is ErrorKind.INVALID_REFERENCE
    assert service.get_assignments() == []


def test_reference_checked_before_uniqueness(service):
    service.add_course(_course())
    service.add_assignment(_assignment(1))
    outcome = service.add_assignment(_assignment(1, course_id=999))
    assert outcome.error is ErrorKind.INVALID_REFERENCE


def test_duplicate_assignment_rejected(service):
    service.add_course(_course())
    assert service.add_assignment(_assignment(1))
    outcome = service.add_assignment(_assignment(1, days=3))
    assert outcome.error is ErrorKind.DUPLICATE_ID
    assert len(service.get_assignments()) == 1


def test_returned_collections_are_copies(service):
    service.add_course(_course())
    service.get_courses().append(_course(202))
    assert service.get_course(202) is None
    assert len(service.get_courses()) == 1


def test_untracked_collections_do_not_auto_save(service, settings):
    service.add_note(Note(1, 101, "n", "c", TODAY))
    assert service.get_notes()[0].id == 1
    assert not os.path.exists(settings.json_path)


# -------------------------- deadlines & counts --------------------------
def test_upcoming_deadlines_scenario(service):
    service.add_course(_course())
    service.add_assignment(_assignment(1, days=5, priority=1))
    service.add_assignment(_assignment(2, days=2, priority=1))
    assert [a.id for a in service.get_upcoming_deadlines()] == [2, 1]


def test_upcoming_deadlines_filter_and_order(service):
    service.add_course(_course())
    service.add_assignment(_assignment(10, days=-1))                          # past
    service.add_assignment(_assignment(11, days=0, priority=2))               # today
    service.add_assignment(_assignment(12, days=0, priority=1))
    service.add_assignment(_assignment(13, days=3, status=Status.COMPLETED))
    service.add_assignment(_assignment(14, days=3, priority=2))
    service.add_assignment(_assignment(9, days=3, priority=2, status=Status.IN_PROGRESS))

    upcoming = service.get_upcoming_deadlines()
    assert [a.id for a in upcoming] == [12, 11, 9, 14]
    keys = [a.sort_key() for a in upcoming]
    assert keys == sorted(keys) and len(set(keys)) == len(keys)


def test_deadlines_follow_injected_clock(settings):
    clock = {"today": TODAY}
    svc = StudyMateService.from_settings(settings, today=lambda: clock["today"])
    svc.add_course(_course())
    svc.add_assignment(_assignment(1, days=1))
    assert len(svc.get_upcoming_deadlines()) == 1
    clock["today"] = TODAY + timedelta(days=2)
    assert svc.get_upcoming_deadlines() == []


def test_status_change_in_place_removes_from_deadlines(service):
    service.add_course(_course())
    a = _assignment(1)
    service.add_assignment(a)
    a.status = Status.COMPLETED
    assert service.get_upcoming_deadlines() == []
    assert service.get_completion_counts_by_course() == {service.get_course(101): 1}


def test_completion_counts_with_unresolved_bucket(service):
    calc, prog = _course(101), _course(102, credits=5)
    service.restore(
        Snapshot(
            courses=[calc, prog],
            assignments=[
                _assignment(1, 101, status=Status.COMPLETED),
                _assignment(2, 101, status="completed"),
                _assignment(3, 102, status=Status.COMPLETED),
                _assignment(4, 102),
                _assignment(5, 777, status=Status.COMPLETED),
            ],
        )
    )
    assert service.get_completion_counts_by_course() == {calc: 2, prog: 1, UNRESOLVED: 1}


# -------------------------- auto-persist --------------------------
def test_auto_persist_writes_csv_and_json_only(service, settings):
    service.add_course(_course())
    service.add_assignment(_assignment(1))

    with open(settings.courses_csv, encoding="utf-8") as f:
        assert f.read().startswith("101,Course 101")
    with open(settings.json_path, encoding="utf-8") as f:
        doc = json.load(f)
    assert [a["id"] for a in doc["assignments"]] == [1]
    assert not os.path.exists(settings.binary_path)
    assert service.last_autosave.ok


def test_auto_persist_order_is_csv_then_json():
    calls: list[str] = []
    csv_repo = _RecordingRepository("csv", calls)
    json_repo = _RecordingRepository("json", calls)
    svc = StudyMateService(csv_repo, json_repo, today=lambda: TODAY)
    svc.add_course(_course())
    assert calls == ["csv", "json"]
    svc.add_course(_course(101))
    assert calls == ["csv", "json"]


def test_auto_persist_failure_keeps_mutation(caplog):
    calls: list[str] = []
    broken = _BrokenRepository()
    json_repo = _RecordingRepository("json", calls)
    svc = StudyMateService(broken, json_repo, today=lambda: TODAY)

    with caplog.at_level(logging.ERROR, logger="studymate.services.study_service"):
        outcome = svc.add_course(_course())

    assert outcome.ok
    assert svc.get_course(101) is not None
    assert broken.calls == 1
    assert calls == []  # json is not reached once csv failed
    assert svc.last_autosave.error is ErrorKind.IO_ERROR
    assert "Error auto-saving data" in caplog.text


# -------------------------- explicit persistence --------------------------
def test_binary_and_sql_are_explicit(service, settings):
    service.add_course(_course())
    service.add_assignment(_assignment(1))
    service.add_note(Note(1, 101, "n", "c", TODAY))
    assert service.save_as_binary().ok
    assert service.save_to_sql().ok

    fresh = StudyMateService.from_settings(settings, today=lambda: TODAY)
    assert fresh.load_from_binary().ok
    assert [n.id for n in fresh.get_notes()] == [1]
    assert fresh.get_course(101) is not None

    other = StudyMateService.from_settings(settings, today=lambda: TODAY)
    assert other.load_from_sql().ok
    assert [a.id for a in other.get_upcoming_deadlines()] == [1]
    assert other.get_course(101) == service.get_course(101)


def test_restore_replaces_state_and_index(service):
    service.add_course(_course(101))
    service.restore(Snapshot(courses=[_course(202)]))
    assert service.get_course(101) is None
    assert service.get_course(202) is not None
    assert service.add_assignment(_assignment(1, course_id=202)).ok


def test_load_all_data_reads_csv_and_keeps_other_collections(service, settings):
    service.add_course(_course())
    service.add_assignment(_assignment(1))
    service.add_note(Note(1, 101, "n", "c", TODAY))

    service.restore(Snapshot(notes=service.get_notes()))
    assert service.get_courses() == []
    assert service.load_all_data().ok
    assert service.get_course(101) is not None
    assert [a.id for a in service.get_assignments()] == [1]
    assert len(service.get_notes()) == 1


def test_failed_load_leaves_state_untouched(service, settings):
    service.add_course(_course())
    with open(settings.json_path, "w", encoding="utf-8") as f:
        f.write("{broken")
    outcome = service.load_from_json()
    assert outcome.error is ErrorKind.DECODE_ERROR
    assert service.get_course(101) is not None


def test_load_from_broken_repository_reports_io_error(service):
    outcome = service.load_from(_BrokenRepository())
    assert not outcome
    assert outcome.error is ErrorKind.IO_ERROR


def test_bootstrap_seeds_sample_data(settings, monkeypatch):
    from studymate.core import config as core_config

    monkeypatch.setenv("STUDYMATE_SEED", "1")
    core_config.get_settings.cache_clear()
    svc = StudyMateService.from_settings(core_config.get_settings(), today=lambda: TODAY)
    assert svc.bootstrap().ok
    assert {c.id for c in svc.get_courses()} == {101, 102}
    assert [a.id for a in svc.get_upcoming_deadlines()] == [1, 3, 2]

    again = StudyMateService.from_settings(core_config.get_settings(), today=lambda: TODAY)
    again.bootstrap()
    assert len(again.get_courses()) == 2


def test_bootstrap_survives_corrupt_csv(service, settings):
    os.makedirs(os.path.dirname(settings.courses_csv), exist_ok=True)
    with open(settings.courses_csv, "w", encoding="utf-8") as f:
        f.write("garbage\n")
    outcome = service.bootstrap()
    assert outcome.error is ErrorKind.DECODE_ERROR
    assert service.get_courses() == []


def test_csv_with_repeated_course_id_is_rejected(service, settings):
    service.add_note(Note(1, 101, "n", "c", TODAY))
    os.makedirs(os.path.dirname(settings.courses_csv), exist_ok=True)
    with open(settings.courses_csv, "w", encoding="utf-8") as f:
        f.write("101,A,Dr. X,Fall,3,\n101,B,Dr. Y,Fall,3,\n")

    outcome = service.load_all_data()

    assert outcome.error is ErrorKind.DECODE_ERROR
    assert "Course ID 101" in outcome.message
    assert service.get_courses() == []
    assert service.get_course(101) is None
    assert len(service.get_notes()) == 1


def test_restore_rejects_repeated_ids(service):
    service.add_course(_course(202))
    with pytest.raises(DecodeError):
        service.restore(Snapshot(courses=[_course(101), _course(101)]))
    with pytest.raises(DecodeError):
        service.restore(Snapshot(courses=[_course(101)], assignments=[_assignment(1), _assignment(1, days=2)]))
    assert [c.id for c in service.get_courses()] == [202]
    assert service.get_course(101) is None


def test_json_with_repeated_assignment_id_is_rejected(service, settings):
    service.add_course(_course())
    service.add_assignment(_assignment(7))
    with open(settings.json_path, encoding="utf-8") as f:
        doc = json.load(f)
    doc["assignments"].append(dict(doc["assignments"][0], title="copy"))
    with open(settings.json_path, "w", encoding="utf-8") as f:
        json.dump(doc, f)

    outcome = service.load_from_json()

    assert outcome.error is ErrorKind.DECODE_ERROR
    assert [a.title for a in service.get_assignments()] == ["A7"]
