"""Flask navigation shell exposing the chat and profile screens as JSON."""

import os
import tempfile
from typing import Optional, Tuple

from flask import Flask, jsonify, request, send_file, Response

from ..app import ProfileChatApp
from ..config.defaults import SYSTEM_CONSTANTS
from ..exceptions import (
    ConstraintViolation,
    DestinationWriteError,
    InvalidDisplayName,
    NotFound,
    ProfileNotInitialized,
    SourceUnavailable
)
from ..logging_config import get_logger
from ..services.error_handler import global_error_handler
from ..services.notification_service import LocalNotifier

logger = get_logger("web")

ERROR_STATUS = (
    (NotFound, 404),
    (InvalidDisplayName, 400),
    (ConstraintViolation, 400),
    (SourceUnavailable, 400),
    (ProfileNotInitialized, 409),
    (DestinationWriteError, 500),
)


def _error_response(error: Exception) -> Tuple[Response, int]:
    status = 500
    for error_type, error_status in ERROR_STATUS:
        if isinstance(error, error_type):
            status = error_status
            break

    if status >= 500:
        logger.error(f"Request failed: {error}")
    else:
        logger.debug(f"Request rejected: {error}")

    return jsonify({
        'success': False,
        'error': str(error),
        'error_type': type(error).__name__
    }), status


class ProfileChatWebApp:
    """Flask web application for the profile chat app."""

    def __init__(self, profile_app: Optional[ProfileChatApp] = None):
        self.app = Flask(__name__)

        self.profile_app = profile_app or ProfileChatApp()
        if not self.profile_app.controller.initialized:
            self.profile_app.start()

        self.app.config['MAX_CONTENT_LENGTH'] = SYSTEM_CONSTANTS["MAX_UPLOAD_SIZE_MB"] * 1024 * 1024

        self._setup_routes()

        logger.info("Profile chat web application initialized")

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.route('/api/chat')
        def api_chat():
            """Chat screen contents."""
            try:
                return jsonify({'success': True, 'data': self.profile_app.chat_screen()})
            except Exception as e:
                return _error_response(e)

        @self.app.route('/api/profile')
        def api_profile():
            """Profile screen contents."""
            try:
                return jsonify({'success': True, 'data': self.profile_app.profile_screen()})
            except Exception as e:
                return _error_response(e)

        @self.app.route('/api/navigate', methods=['POST'])
        def api_navigate():
            """Switch the current screen."""
            data = request.get_json(silent=True) or {}
            screen = data.get('screen')
            if not screen:
                return jsonify({'success': False, 'error': 'No screen provided'}), 400

            try:
                current = self.profile_app.navigate(screen)
            except ValueError as e:
                return jsonify({'success': False, 'error': str(e)}), 400

            return jsonify({'success': True, 'data': {'screen': current}})

        @self.app.route('/api/profile/name', methods=['POST'])
        def api_change_name():
            """Rename the profile."""
            data = request.get_json(silent=True) or {}
            if 'name' not in data or not isinstance(data['name'], str):
                return jsonify({'success': False, 'error': 'No name provided'}), 400

            try:
                profile = self.profile_app.change_name(data['name'])
                return jsonify({'success': True, 'data': profile.to_dict()})
            except Exception as e:
                return _error_response(e)

        @self.app.route('/api/profile/picture', methods=['POST'])
        def api_pick_picture():
            """Ingest an uploaded picture; an empty upload means nothing was selected."""
            upload = request.files.get('image')

            try:
                if upload is None or not upload.filename:
                    profile = self.profile_app.on_picture_picked(None)
                    return jsonify({'success': True, 'data': profile.to_dict()})

                fd, upload_path = tempfile.mkstemp(prefix=".upload-", dir=self.profile_app.config.data_dir)
                try:
                    with os.fdopen(fd, 'wb') as f:
                        upload.save(f)
                    profile = self.profile_app.on_picture_picked(upload_path)
                finally:
                    os.remove(upload_path)

                return jsonify({'success': True, 'data': profile.to_dict()})
            except Exception as e:
                return _error_response(e)

        @self.app.route('/api/profile/picture', methods=['GET'])
        def api_get_picture():
            """Serve the profile picture."""
            profile = self.profile_app.profile
            if not profile.has_picture or not os.path.isfile(profile.picture_ref):
                return jsonify({'success': False, 'error': 'No profile picture'}), 404

            return send_file(profile.picture_ref)

        @self.app.route('/api/motion', methods=['POST'])
        def api_motion():
            """Feed one accelerometer reading."""
            data = request.get_json(silent=True) or {}
            try:
                x, y, z = (float(data[axis]) for axis in ('x', 'y', 'z'))
            except (KeyError, TypeError, ValueError):
                return jsonify({'success': False, 'error': 'x, y and z readings are required'}), 400

            try:
                return jsonify({'success': True, 'data': self.profile_app.handle_motion_reading(x, y, z)})
            except Exception as e:
                return _error_response(e)

        @self.app.route('/api/notifications')
        def api_notifications():
            """Notifications delivered to the local tray."""
            notifier = self.profile_app.notifier
            if not isinstance(notifier, LocalNotifier):
                return jsonify({'success': False, 'error': 'Notifications are not kept locally'}), 404

            return jsonify({
                'success': True,
                'data': [message.to_dict() for message in notifier.tray]
            })

        @self.app.route('/api/status')
        def api_status():
            """Service status."""
            return jsonify({
                'success': True,
                'data': {
                    'screen': self.profile_app.current_screen,
                    'motion_listening': self.profile_app.motion_monitor.running,
                    'alerts': self.profile_app.motion_monitor.alert_count,
                    'errors': global_error_handler.get_error_stats()
                }
            })

    def run(self, host='127.0.0.1', port=5000, debug=False):
        """Run the Flask application."""
        logger.info(f"Starting profile chat web interface on {host}:{port}")
        self.app.run(host=host, port=port, debug=debug, threaded=False)

    def get_app(self):
        """Get the Flask app instance for external WSGI servers."""
        return self.app


def create_app(profile_app: Optional[ProfileChatApp] = None) -> Flask:
    """Factory function to create Flask app."""
    web_app = ProfileChatWebApp(profile_app)
    return web_app.get_app()
