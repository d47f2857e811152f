"""
Storage Utility
===============

Product image storage on the Cloudinary media host.
Images are addressed by the opaque public id Cloudinary returns on upload.
"""

import base64

import cloudinary
import cloudinary.uploader

from .config import get_config_value

# Uploaded images are bounded to this box, keeping the aspect ratio
IMAGE_TRANSFORMATION = [{'width': 800, 'height': 800, 'crop': 'limit'}]


def _configure():
    """Push the CLOUDINARY_* settings into the SDK before each call."""
    cloudinary.config(
        cloud_name=get_config_value('CLOUDINARY_CLOUD_NAME'),
        api_key=get_config_value('CLOUDINARY_API_KEY'),
        api_secret=get_config_value('CLOUDINARY_API_SECRET'),
        secure=True,
    )


def file_to_data_uri(file_storage):
    """Encode an uploaded werkzeug FileStorage as a base64 data URI."""
    content_type = file_storage.mimetype or 'application/octet-stream'
    encoded = base64.b64encode(file_storage.read()).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


def upload_image(file, folder='products'):
    """Upload an image to the media host.

    Args:
        file: Anything the Cloudinary uploader accepts (data URI, URL, bytes).
        folder: Subfolder below CLOUDINARY_ROOT_FOLDER.

    Returns:
        {'url': secure URL, 'publicId': Cloudinary public id}
    """
    _configure()
    root = get_config_value('CLOUDINARY_ROOT_FOLDER', 'ecommerce-dashboard')
    result = cloudinary.uploader.upload(
        file,
        folder=f"{root}/{folder}",
        transformation=IMAGE_TRANSFORMATION,
    )
    return {
        'url': result['secure_url'],
        'publicId': result['public_id'],
    }


def delete_image(public_id):
    """Delete an image from the media host by public id. Raises on failure."""
    if not public_id:
        return False
    _configure()
    cloudinary.uploader.destroy(public_id)
    return True
