"""Unit tests for the motion alert gate and monitor."""

import unittest
import os
import sys
from unittest.mock import Mock

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from profile_chat.models.motion import MotionSample
from profile_chat.services.motion_alert import MotionAlertGate, MotionMonitor
from profile_chat.services.sensor_source import PushedSensorSource


class TestMotionSample(unittest.TestCase):
    """Test cases for MotionSample."""

    def test_magnitude_is_algebraic_sum(self):
        self.assertEqual(MotionSample.from_axes(1.0, 2.0, 3.0).magnitude, 6.0)

    def test_negative_axes_cancel(self):
        self.assertEqual(MotionSample.from_axes(10.0, -10.0, 0.5).magnitude, 0.5)


class TestMotionAlertGate(unittest.TestCase):
    """Test cases for MotionAlertGate."""

    def test_threshold_is_strict(self):
        self.assertFalse(MotionAlertGate.evaluate(MotionSample(15.0)))
        self.assertTrue(MotionAlertGate.evaluate(MotionSample(15.0001)))

    def test_below_threshold(self):
        self.assertFalse(MotionAlertGate.evaluate(MotionSample(9.81)))
        self.assertFalse(MotionAlertGate.evaluate(MotionSample(-30.0)))

    def test_custom_threshold(self):
        self.assertTrue(MotionAlertGate.evaluate(MotionSample(5.5), threshold=5.0))
        self.assertFalse(MotionAlertGate.evaluate(MotionSample(5.0), threshold=5.0))


class TestMotionMonitor(unittest.TestCase):
    """Test cases for MotionMonitor."""

    def setUp(self):
        self.sensor = PushedSensorSource()
        self.notifier = Mock()
        self.notifier.notify.return_value = True
        self.monitor = MotionMonitor(self.sensor, self.notifier)

    def tearDown(self):
        self.monitor.stop()

    def test_start_registers_once(self):
        self.monitor.start()
        self.monitor.start()

        self.assertTrue(self.monitor.running)
        self.assertEqual(self.sensor.listener_count, 1)

    def test_stop_unregisters(self):
        self.monitor.start()
        self.monitor.stop()

        self.assertFalse(self.monitor.running)
        self.assertEqual(self.sensor.listener_count, 0)
        self.assertEqual(self.sensor.push(20.0, 0.0, 0.0), 0)
        self.notifier.notify.assert_not_called()

    def test_context_manager_releases_listener(self):
        with self.monitor:
            self.assertEqual(self.sensor.listener_count, 1)
        self.assertEqual(self.sensor.listener_count, 0)

    def test_reading_above_threshold_notifies(self):
        self.monitor.start()
        self.sensor.push(5.0, 5.0, 6.0)

        self.notifier.notify.assert_called_once()
        notification_id, title, body = self.notifier.notify.call_args.args
        self.assertIsInstance(notification_id, int)
        self.assertEqual(title, "Basic Notification")
        self.assertEqual(body, "This is a notification")
        self.assertEqual(self.monitor.last_magnitude, 16.0)

    def test_reading_at_threshold_is_quiet(self):
        self.monitor.start()
        self.sensor.push(5.0, 5.0, 5.0)

        self.notifier.notify.assert_not_called()
        self.assertEqual(self.monitor.last_magnitude, 15.0)

    def test_repeated_notifications_without_cooldown(self):
        self.monitor.start()
        for _ in range(3):
            self.sensor.push(20.0, 0.0, 0.0)

        self.assertEqual(self.notifier.notify.call_count, 3)
        self.assertEqual(self.monitor.alert_count, 3)

    def test_cooldown_suppresses_repeats(self):
        now = [100.0]
        monitor = MotionMonitor(self.sensor, self.notifier, cooldown_seconds=5.0, clock=lambda: now[0])

        self.assertTrue(monitor.on_reading(20.0, 0.0, 0.0))
        now[0] = 103.0
        self.assertTrue(monitor.on_reading(20.0, 0.0, 0.0))
        self.assertEqual(self.notifier.notify.call_count, 1)

        now[0] = 105.0
        monitor.on_reading(20.0, 0.0, 0.0)
        self.assertEqual(self.notifier.notify.call_count, 2)


if __name__ == '__main__':
    unittest.main()
