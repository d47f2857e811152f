from flask import jsonify, request

from ...core.errors import internal_error
from ...core.logging_service import LoggingService
from ...core.storage import file_to_data_uri, upload_image
from ..auth.utils import get_current_user, login_required
from . import upload_bp


@upload_bp.route('/api/upload', methods=['POST'])
@login_required
def upload():
    """Upload one image (multipart field "file") and return its url and public id"""
    file = request.files.get('file')
    if file is None or not file.filename:
        return jsonify({'message': 'No file provided'}), 400

    if not (file.mimetype or '').startswith('image/'):
        return jsonify({'message': 'File must be an image'}), 400

    try:
        result = upload_image(file_to_data_uri(file), folder='products')
    except Exception as e:
        return internal_error('upload', e, message='Upload failed')

    LoggingService.log_user_action(
        'upload', 'image uploaded', user_id=get_current_user()['userId'],
        details={'publicId': result['publicId'], 'filename': file.filename},
    )
    return jsonify(result)
