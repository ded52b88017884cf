"""Unit tests for the Flask navigation shell."""

import unittest
import tempfile
import shutil
import io
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from profile_chat.app import ProfileChatApp
from profile_chat.web.app import ProfileChatWebApp, create_app
from tests.helpers import make_config_manager, make_image_bytes


class TestProfileChatWebApp(unittest.TestCase):
    """Test cases for ProfileChatWebApp."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.profile_app = ProfileChatApp(make_config_manager(self.test_dir))
        self.web_app = ProfileChatWebApp(self.profile_app)
        self.web_app.app.config['TESTING'] = True
        self.client = self.web_app.app.test_client()

    def tearDown(self):
        self.profile_app.shutdown()
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_web_app_initialization(self):
        """Creating the web app loads the profile."""
        self.assertTrue(self.profile_app.controller.initialized)
        self.assertIsNotNone(create_app(self.profile_app))

    def test_chat_screen(self):
        response = self.client.get('/api/chat')
        self.assertEqual(response.status_code, 200)

        data = response.get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['data']['profile']['display_name'], "Test Name")
        self.assertTrue(data['data']['messages'])

    def test_profile_screen(self):
        response = self.client.get('/api/profile')
        self.assertEqual(response.status_code, 200)

        data = response.get_json()['data']
        self.assertEqual(data['profile']['id'], 1)
        self.assertEqual(data['sensor_data'], 0.0)

    def test_change_name(self):
        response = self.client.post('/api/profile/name', json={'name': "Alice"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['data']['display_name'], "Alice")

        chat = self.client.get('/api/chat').get_json()['data']
        self.assertEqual(chat['messages'][0]['display_name'], "Alice")

    def test_change_name_rejects_empty(self):
        response = self.client.post('/api/profile/name', json={'name': ""})
        self.assertEqual(response.status_code, 400)

        data = response.get_json()
        self.assertFalse(data['success'])
        self.assertEqual(data['error_type'], "InvalidDisplayName")

    def test_change_name_requires_name(self):
        response = self.client.post('/api/profile/name', json={})
        self.assertEqual(response.status_code, 400)

    def test_upload_picture(self):
        image = make_image_bytes("teal")
        response = self.client.post(
            '/api/profile/picture',
            data={'image': (io.BytesIO(image), 'teal.png')},
            content_type='multipart/form-data'
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()['data']['has_picture'])

        picture = self.client.get('/api/profile/picture')
        self.assertEqual(picture.status_code, 200)
        self.assertEqual(picture.data, image)
        picture.close()

        leftovers = [name for name in os.listdir(self.profile_app.config.data_dir)
                     if name.startswith('.upload-')]
        self.assertEqual(leftovers, [])

    def test_upload_without_file_is_noop(self):
        response = self.client.post('/api/profile/picture', data={},
                                    content_type='multipart/form-data')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.get_json()['data']['has_picture'])

    def test_upload_non_image(self):
        response = self.client.post(
            '/api/profile/picture',
            data={'image': (io.BytesIO(b"plain text"), 'notes.txt')},
            content_type='multipart/form-data'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error_type'], "InvalidImage")

    def test_picture_missing(self):
        response = self.client.get('/api/profile/picture')
        self.assertEqual(response.status_code, 404)

    def test_navigate_and_motion(self):
        response = self.client.post('/api/navigate', json={'screen': 'profile'})
        self.assertEqual(response.status_code, 200)

        response = self.client.post('/api/motion', json={'x': 10.0, 'y': 3.0, 'z': 3.0})
        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data['magnitude'], 16.0)
        self.assertTrue(data['alerted'])

        notifications = self.client.get('/api/notifications').get_json()['data']
        self.assertEqual(len(notifications), 1)
        self.assertEqual(notifications[0]['title'], "Basic Notification")

    def test_navigate_unknown_screen(self):
        response = self.client.post('/api/navigate', json={'screen': 'settings'})
        self.assertEqual(response.status_code, 400)

    def test_motion_requires_axes(self):
        response = self.client.post('/api/motion', json={'x': 1.0})
        self.assertEqual(response.status_code, 400)

    def test_status(self):
        response = self.client.get('/api/status')
        self.assertEqual(response.status_code, 200)

        data = response.get_json()['data']
        self.assertEqual(data['screen'], 'chat')
        self.assertFalse(data['motion_listening'])
        self.assertIn('errors', data)


if __name__ == '__main__':
    unittest.main()
