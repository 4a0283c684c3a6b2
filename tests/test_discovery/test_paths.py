"""Tests for protogen.discovery.paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from protogen.discovery.paths import package_identity_for
from protogen.exceptions import ConfigError, LayoutError


class TestPackageIdentity:
    """Identity and base folder derivation around the sentinel directory."""

    def test_relative_path(self) -> None:
        assert package_identity_for("a/proto/x/one.proto") == ("proto_x", "a")

    def test_absolute_path(self) -> None:
        identity, folder = package_identity_for("/generator/api/proto/billing/v1/invoice.proto")
        assert identity == "proto_billing_v1"
        assert folder == "/generator/api"

    def test_accepts_path_objects(self) -> None:
        assert package_identity_for(Path("a/proto/x/one.proto")) == ("proto_x", "a")

    def test_file_directly_in_sentinel(self) -> None:
        assert package_identity_for("svc/proto/common.proto") == ("proto", "svc")

    def test_sentinel_first_segment_has_empty_folder(self) -> None:
        assert package_identity_for("proto/x/one.proto") == ("proto_x", "")

    def test_rightmost_sentinel_wins(self) -> None:
        identity, folder = package_identity_for("root/proto/inner/proto/v2/a.proto")
        assert identity == "proto_v2"
        assert folder == "root/proto/inner"

    def test_file_name_is_not_a_segment(self) -> None:
        with pytest.raises(LayoutError):
            package_identity_for("a/b/proto")

    def test_custom_sentinel(self) -> None:
        assert package_identity_for("x/schemas/y/z.proto", sentinel="schemas") == (
            "schemas_y",
            "x",
        )

    def test_missing_sentinel_raises(self) -> None:
        with pytest.raises(LayoutError, match="No 'proto' directory"):
            package_identity_for("a/b/c/one.proto")

    def test_layout_error_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            package_identity_for("one.proto")

    def test_partial_segment_match_is_not_sentinel(self) -> None:
        with pytest.raises(LayoutError):
            package_identity_for("a/protos/x/one.proto")

    def test_deterministic(self) -> None:
        path = "/srv/a/proto/x/y/one.proto"
        assert package_identity_for(path) == package_identity_for(path)

    def test_same_directory_same_identity(self) -> None:
        assert package_identity_for("a/proto/x/one.proto") == package_identity_for(
            "a/proto/x/two.proto"
        )
