# SPDX-License-Identifier: MIT
"""
Tests for finding stores and the locked repository.
"""
import json
import os
import subprocess
import sys
import threading
from pathlib import Path

import pytest

import jsleak
from jsleak.core.exceptions import FindingStoreError
from jsleak.core.findings import Finding, Occurrence, SourceContent, Validity
from jsleak.core.fingerprint import compute_fingerprint
from jsleak.core.payloads import ApiKeyPayload
from jsleak.core.store import FindingRepository, InMemoryFindingStore, JsonFileFindingStore


def make_finding(value, validity=Validity.VALID):
    payload = ApiKeyPayload(api_key=value)
    occurrence = Occurrence(
        secret_type="Groq",
        fingerprint=compute_fingerprint(payload),
        secret_value=payload,
        file_path="main.js",
        url="https://app.test/main.js",
        source_content=SourceContent.unattributed("main.js", payload.snippet()),
        validity=validity,
    )
    return Finding.from_occurrence(occurrence, "2024-01-01T00:00:00+00:00")


class TestJsonFileFindingStore:
    """Test on-disk persistence."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileFindingStore(str(tmp_path / "none.json")).retrieve_findings() == []

    def test_round_trip(self, tmp_path):
        store = JsonFileFindingStore(str(tmp_path / "nested" / "findings.json"))
        findings = [make_finding("gsk_one"), make_finding("gsk_two")]
        store.store_findings(findings)
        assert store.retrieve_findings() == findings
        assert [p.name for p in (tmp_path / "nested").iterdir()] == ["findings.json"]

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "findings.json"
        path.write_text("{not json")
        with pytest.raises(FindingStoreError) as exc:
            JsonFileFindingStore(str(path)).retrieve_findings()
        assert str(path) in str(exc.value)

    def test_non_list_file(self, tmp_path):
        path = tmp_path / "findings.json"
        path.write_text(json.dumps({"fingerprint": "x"}))
        with pytest.raises(FindingStoreError, match="must contain a list"):
            JsonFileFindingStore(str(path)).retrieve_findings()


class TestFindingRepository:
    """Test the read-modify-write discipline."""

    def test_transaction_writes_on_success(self):
        repository = FindingRepository(InMemoryFindingStore())
        with repository.transaction() as findings:
            findings.append(make_finding("gsk_one"))
        assert len(repository.all()) == 1

    def test_transaction_discards_on_error(self):
        repository = FindingRepository(InMemoryFindingStore())
        with pytest.raises(RuntimeError):
            with repository.transaction() as findings:
                findings.append(make_finding("gsk_one"))
                raise RuntimeError("abort")
        assert repository.all() == []

    def test_update(self):
        finding = make_finding("gsk_one")
        repository = FindingRepository(InMemoryFindingStore([finding]))

        def mark_invalid(f):
            f.validity = Validity.INVALID

        updated = repository.update(finding.fingerprint, mark_invalid)
        assert updated.validity == Validity.INVALID
        assert repository.get(finding.fingerprint).validity == Validity.INVALID
        assert repository.update("missing", mark_invalid) is None

    def test_contains_value(self):
        repository = FindingRepository(InMemoryFindingStore([make_finding("gsk_one")]))
        assert repository.contains_value("gsk_one")
        assert not repository.contains_value("gsk_two")

    def test_concurrent_updates_are_not_lost(self):
        """Test that parallel read-modify-write cycles never drop each other's changes."""
        repository = FindingRepository(InMemoryFindingStore())
        barrier = threading.Barrier(8)

        def add(i):
            barrier.wait()
            with repository.transaction() as findings:
                findings.append(make_finding(f"gsk_value_{i}"))

        threads = [threading.Thread(target=add, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(repository.all()) == 8


WRITER_SCRIPT = """
import json
import os
import subprocess
import sys
import sys
import time

from jsleak.core.findings import Finding
from jsleak.core.store import FindingRepository, JsonFileFindingStore

path, record = sys.argv[1], json.loads(sys.argv[2])
repository = FindingRepository(JsonFileFindingStore(path))
with repository.transaction() as findings:
    time.sleep(0.5)
    findings.append(Finding.from_dict(record))
"""


class TestCrossProcessLocking:
    """Test that separate processes sharing one findings file serialize."""

    def test_lock_file_sits_beside_store(self, tmp_path):
        repository = FindingRepository(JsonFileFindingStore(str(tmp_path / "findings.json")))
        with repository.transaction() as findings:
            findings.append(make_finding("gsk_one"))
            assert (tmp_path / "findings.json.lock").exists()
        assert len(repository.all()) == 1

    def test_two_processes_keep_both_findings(self, tmp_path):
        path = tmp_path / "findings.json"
        script = tmp_path / "writer.py"
        script.write_text(WRITER_SCRIPT)
        src_dir = str(Path(jsleak.__file__).resolve().parents[1])
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_dir, env.get("PYTHONPATH")]))

        writers = [
            subprocess.Popen(
                [sys.executable, str(script), str(path), json.dumps(make_finding(value).to_dict())],
                env=env,
            )
            for value in ("gsk_first_writer", "gsk_second_writer")
        ]
        for writer in writers:
            assert writer.wait(timeout=60) == 0

        stored = JsonFileFindingStore(str(path)).retrieve_findings()
        assert len(stored) == 2
        assert any(f.contains_value("gsk_first_writer") for f in stored)
        assert any(f.contains_value("gsk_second_writer") for f in stored)
