"""
Unit tests for profile_analyzer.processors.profile_intake module.
"""
import pytest

from profile_analyzer.core.errors import ProfileFormatError
from profile_analyzer.processors.profile_intake import ProfileIntake


class TestProfileIntake:
    """Tests for ProfileIntake.normalize()."""

    def test_converts_nodes_and_call_frames(self, app_profile):
        """Test that camel-case records become typed nodes."""
        profile = ProfileIntake().normalize(app_profile)

        assert len(profile.nodes) == 5
        main = profile.nodes[1]
        assert main.id == 2
        assert main.children == (3, 4)
        assert main.call_frame.function_name == "main"
        assert main.call_frame.line_number == 0
        assert profile.start_time == 1000
        assert profile.end_time == 1050

    def test_keeps_one_fewer_delta_than_samples(self, app_profile):
        """Test that correctly sized deltas are kept as-is."""
        profile = ProfileIntake().normalize(app_profile)

        assert len(profile.samples) == 7
        assert len(profile.time_deltas) == 6

    def test_drops_unused_trailing_v8_delta(self, chain_profile):
        """Test that the last delta is dropped when V8 emits one per sample."""
        chain_profile["timeDeltas"] = [100, 5, 5, 5]
        profile = ProfileIntake().normalize(chain_profile)

        assert profile.time_deltas == (100, 5, 5)

    def test_truncates_surplus_deltas(self, chain_profile):
        """Test that extra trailing deltas are ignored."""
        chain_profile["timeDeltas"] = [5, 5, 5, 5, 5, 5]
        profile = ProfileIntake().normalize(chain_profile)

        assert profile.time_deltas == (5, 5, 5)

    def test_missing_samples_is_not_an_error(self, chain_profile):
        """Test that an aborted capture without samples is accepted."""
        del chain_profile["samples"]
        del chain_profile["timeDeltas"]
        profile = ProfileIntake().normalize(chain_profile)

        assert profile.samples is None
        assert profile.time_deltas is None

    def test_does_not_mutate_input(self, app_profile):
        """Test that the caller's record is left untouched."""
        before = repr(app_profile)
        ProfileIntake().normalize(app_profile)

        assert repr(app_profile) == before

    def test_reads_vscode_annotations(self, annotated_profile):
        """Test that embedded locations and root path are carried over."""
        profile = ProfileIntake().normalize(annotated_profile)

        assert profile.root_path == "/srv/app"
        assert len(profile.annotations) == 4
        assert profile.nodes[1].location_id == 1
        assert profile.nodes[1].position_ticks[0].start_location_id == 2
        assert profile.annotations[1].locations[1].source.path == "/srv/app/src/app.ts"

    def test_rejects_non_object(self):
        """Test that a non-object profile is rejected."""
        with pytest.raises(ProfileFormatError):
            ProfileIntake().normalize([1, 2, 3])

    def test_rejects_missing_nodes(self):
        """Test that a profile without nodes is rejected."""
        with pytest.raises(ProfileFormatError, match="nodes"):
            ProfileIntake().normalize({"startTime": 0, "endTime": 1})

    def test_rejects_sparse_node_ids(self, chain_profile):
        """Test that node ids must be numbered 1..N."""
        chain_profile["nodes"][2]["id"] = 7
        chain_profile["nodes"][1]["children"] = [7]
        with pytest.raises(ProfileFormatError, match="1..N"):
            ProfileIntake().normalize(chain_profile)

    def test_rejects_node_without_call_frame(self, chain_profile):
        """Test that every node needs a call frame."""
        del chain_profile["nodes"][0]["callFrame"]
        with pytest.raises(ProfileFormatError, match="callFrame"):
            ProfileIntake().normalize(chain_profile)

    def test_rejects_unknown_sample(self, chain_profile):
        """Test that samples must reference existing nodes."""
        chain_profile["samples"] = [1, 2, 9, 3]
        with pytest.raises(ProfileFormatError, match="unknown node 9"):
            ProfileIntake().normalize(chain_profile)

    def test_rejects_too_few_deltas(self, chain_profile):
        """Test that missing deltas in the middle of a capture are rejected."""
        chain_profile["timeDeltas"] = [5]
        with pytest.raises(ProfileFormatError, match="time deltas"):
            ProfileIntake().normalize(chain_profile)

    def test_rejects_non_object_annotations(self, chain_profile):
        """Test that the '$vscode' block must be an object."""
        chain_profile["$vscode"] = ["not", "an", "object"]
        with pytest.raises(ProfileFormatError, match=r"\$vscode"):
            ProfileIntake().normalize(chain_profile)

    def test_rejects_non_list_annotated_locations(self, annotated_profile):
        """Test that embedded locations must be a list."""
        annotated_profile["$vscode"]["locations"] = {"0": {}}
        with pytest.raises(ProfileFormatError, match="locations"):
            ProfileIntake().normalize(annotated_profile)

    @pytest.mark.parametrize("tick", [
        {"ticks": 3},
        {"line": 4},
        {"line": "4", "ticks": 3},
        7,
    ])
    def test_rejects_incomplete_position_ticks(self, chain_profile, tick):
        """Test that position ticks need an integer line and tick count."""
        chain_profile["nodes"][2]["positionTicks"] = [tick]
        with pytest.raises(ProfileFormatError, match="position tick"):
            ProfileIntake().normalize(chain_profile)
