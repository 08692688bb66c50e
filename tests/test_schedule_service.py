import unittest

from rallysync.models import ScheduleEntry, ScheduleSettings, MODE_FIXED_TARGET
from rallysync.services import ScheduleBuilder, start_delta

# 19:00:00 UTC on some day
NOW = 20000 * 86400 + 19 * 3600


def entries(*durations):
    names = "ABCDEFGH"
    return [ScheduleEntry(id=f"id-{names[i]}", name=names[i], duration_seconds=d) for i, d in enumerate(durations)]


class ReadinessModeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ScheduleBuilder()

    def test_three_leader_scenario(self) -> None:
        plan = self.builder.build_plan(entries(30, 90, 10), NOW, "Castle")

        self.assertTrue(plan.has_plan)
        self.assertEqual([r.arrival_ts - NOW for r in plan.rows], [428, 430, 432])
        self.assertEqual([r.send_ts - NOW for r in plan.rows], [398, 340, 422])
        self.assertEqual([r.rally_start_ts - NOW for r in plan.rows], [98, 40, 122])
        self.assertEqual([r.start_delta_seconds for r in plan.rows], [0, -58, 24])
        self.assertEqual([r.offset_seconds for r in plan.rows], [0, 2, 4])
        self.assertEqual([r.seq for r in plan.rows], [1, 2, 3])
        self.assertEqual(plan.rows[0].arrival_time, "19:07:08")
        self.assertEqual(plan.rows[1].rally_start_time, "19:00:40")
        self.assertEqual(plan.rows[1].duration_hms, "0:01:30")
        self.assertEqual(plan.rows[1].start_delta_label, "-58s")
        self.assertTrue(all(r.target == "Castle" for r in plan.rows))
        self.assertIn("Target: Castle.", plan.note)

    def test_arrivals_spaced_by_gap_and_rally_start_identity(self) -> None:
        plan = self.builder.build_plan(entries(300, 45, 620, 12, 180), NOW)
        rows = plan.rows
        for i in range(len(rows)):
            for j in range(i + 1, len(rows)):
                self.assertEqual(rows[j].arrival_ts - rows[i].arrival_ts, (j - i) * 2)
        for row in rows:
            self.assertEqual(row.send_ts, row.arrival_ts - row.duration_seconds)
            self.assertEqual(row.rally_start_ts, row.arrival_ts - row.duration_seconds - 300)

    def test_large_last_duration_keeps_every_floor(self) -> None:
        plan = self.builder.build_plan(entries(30, 90, 10, 5000), NOW)

        starts = [row.rally_start_ts for row in plan.rows]
        self.assertTrue(all(start >= NOW + 40 for start in starts))
        # the leader with the largest skew sits exactly on the floor
        self.assertEqual(min(starts), NOW + 40)
        self.assertEqual(plan.rows[3].rally_start_ts, NOW + 40)

    def test_zero_durations_are_skipped_and_renumbered(self) -> None:
        plan = self.builder.build_plan(entries(0, 60, 0, 30), NOW)

        self.assertEqual([r.name for r in plan.rows], ["B", "D"])
        self.assertEqual([r.seq for r in plan.rows], [1, 2])
        self.assertEqual(plan.rows[1].arrival_ts - plan.rows[0].arrival_ts, 2)

    def test_unnamed_leaders_get_default_labels(self) -> None:
        plan = self.builder.build_plan(
            [ScheduleEntry(id="x", name="", duration_seconds=20), ScheduleEntry(id="y", name="", duration_seconds=25)],
            NOW,
        )
        self.assertEqual([r.name for r in plan.rows], ["Leader 1", "Leader 2"])

    def test_empty_or_zero_only_list_gives_notice(self) -> None:
        for case in ([], entries(0, 0)):
            plan = self.builder.build_plan(case, NOW)
            self.assertFalse(plan.has_plan)
            self.assertTrue(plan.note)

    def test_custom_settings(self) -> None:
        builder = ScheduleBuilder(ScheduleSettings(gap_seconds=5, rally_prep_seconds=60, readiness_seconds=10))
        plan = builder.build_plan(entries(20, 20), NOW)
        self.assertEqual([r.arrival_ts - NOW for r in plan.rows], [90, 95])
        self.assertEqual(plan.rows[0].rally_start_ts, NOW + 10)

    def test_negative_settings_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ScheduleSettings(gap_seconds=-1)

    def test_start_delta_helper(self) -> None:
        self.assertEqual(start_delta(0, 30, 30, 2), 0)
        self.assertEqual(start_delta(1, 90, 30, 2), -58)
        self.assertEqual(start_delta(2, 10, 30, 2), 24)

    def test_huge_duration_still_renders(self) -> None:
        plan = self.builder.build_plan(entries(60 * 10 ** 12, 30), NOW, "Castle")
        data = plan.to_dict()
        self.assertEqual(len(data["rows"]), 2)
        self.assertRegex(data["rows"][0]["arrival_time"], r"^\d\d:\d\d:\d\d$")
        self.assertEqual(plan.rows[0].rally_start_ts, NOW + 40)


class FixedTargetModeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ScheduleBuilder()

    def test_target_later_today(self) -> None:
        resolution = self.builder.resolve_target_arrival("19:10", NOW)
        self.assertTrue(resolution.accepted)
        self.assertEqual(resolution.arrival_ts, NOW + 600)

    def test_passed_target_rolls_to_next_day(self) -> None:
        resolution = self.builder.resolve_target_arrival("18:00:00", NOW)
        self.assertTrue(resolution.accepted)
        self.assertEqual(resolution.arrival_ts, NOW + 23 * 3600)

    def test_target_within_seven_minutes_rejected(self) -> None:
        resolution = self.builder.resolve_target_arrival("19:05", NOW)
        self.assertFalse(resolution.accepted)
        self.assertEqual(resolution.earliest_ts, NOW + 420)

        plan = self.builder.build_fixed_target_plan(entries(30), "19:05", NOW)
        self.assertFalse(plan.has_plan)
        self.assertEqual(plan.mode, MODE_FIXED_TARGET)
        self.assertEqual(plan.earliest_target_ts, NOW + 420)
        self.assertIn("19:07:00", plan.note)

    def test_target_equal_to_now_is_not_rolled_and_is_rejected(self) -> None:
        resolution = self.builder.resolve_target_arrival("19:00:00", NOW)
        self.assertEqual(resolution.arrival_ts, NOW)
        self.assertFalse(resolution.accepted)

    def test_exactly_seven_minutes_accepted(self) -> None:
        self.assertTrue(self.builder.resolve_target_arrival("19:07:00", NOW).accepted)

    def test_arrivals_pinned_to_target_without_shift(self) -> None:
        plan = self.builder.build_fixed_target_plan(entries(30, 90, 10), "19:10:00", NOW, "Castle")

        self.assertEqual([r.arrival_time for r in plan.rows], ["19:10:00", "19:10:02", "19:10:04"])
        self.assertEqual([r.send_time for r in plan.rows], ["19:09:30", "19:08:32", "19:09:54"])
        self.assertEqual([r.rally_start_time for r in plan.rows], ["19:04:30", "19:03:32", "19:04:54"])
        self.assertEqual([r.start_delta_seconds for r in plan.rows], [0, -58, 24])
        self.assertNotIn("less than", plan.note)

    def test_long_march_may_get_short_buffer(self) -> None:
        plan = self.builder.build_fixed_target_plan(entries(600), "19:10:00", NOW)

        self.assertTrue(plan.has_plan)
        self.assertLess(plan.rows[0].rally_start_ts, NOW + 40)
        self.assertIn("1 leader(s)", plan.note)

    def test_zero_durations_notice(self) -> None:
        plan = self.builder.build_fixed_target_plan(entries(0), "20:00", NOW)
        self.assertFalse(plan.has_plan)
        self.assertTrue(plan.note)
        self.assertIsNone(plan.earliest_target_ts)


if __name__ == "__main__":
    unittest.main()
