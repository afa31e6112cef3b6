"""Unit tests for upload_batch."""

import asyncio
from unittest.mock import Mock

from googleapiclient.errors import HttpError

from photo_drive.uploads import UploadItem, upload_batch

from conftest import FakeDriveGateway


def _items(*names):
    return [UploadItem(original_name=name, content=b"x", mime_type="image/jpeg") for name in names]


class TestUploadBatch:
    """Tests for the bounded-concurrency upload fan-out."""

    def setup_method(self):
        self.gateway = FakeDriveGateway()
        self.folder_id = self.gateway.add_folder("Wedding")

    def _run(self, items, concurrency=5):
        return asyncio.run(
            upload_batch(
                self.gateway,
                self.folder_id,
                items,
                date="2024-01-01",
                photographer="Alex",
                concurrency=concurrency,
            )
        )

    def test_names_follow_date_photographer_original(self):
        outcomes = self._run(_items("a.jpg"))

        assert outcomes[0].ok
        assert outcomes[0].display_name == "2024-01-01_Alex_a.jpg"
        assert outcomes[0].file["name"] == "2024-01-01_Alex_a.jpg"
        assert self.gateway.files[outcomes[0].file["id"]]["parent"] == self.folder_id

    def test_concurrency_is_bounded(self):
        names = [f"{i}.jpg" for i in range(8)]
        for name in names:
            self.gateway.delay_by_name[f"2024-01-01_Alex_{name}"] = 0.05

        outcomes = self._run(_items(*names), concurrency=2)

        assert all(outcome.ok for outcome in outcomes)
        assert 1 <= self.gateway.max_active <= 2

    def test_failures_are_collected_per_item(self):
        self.gateway.fail_names.add("2024-01-01_Alex_b.jpg")

        outcomes = self._run(_items("a.jpg", "b.jpg", "c.jpg"))

        assert [outcome.ok for outcome in outcomes] == [True, False, True]
        assert isinstance(outcomes[1].error, RuntimeError)
        assert outcomes[1].file is None
        assert len(self.gateway.files) == 2

    def test_http_errors_are_collected(self):
        resp = Mock(status=429, reason="Too Many Requests")
        self.gateway.create_file = Mock(side_effect=HttpError(resp, b"quota"))

        outcomes = self._run(_items("a.jpg"))

        assert not outcomes[0].ok
        assert isinstance(outcomes[0].error, HttpError)
