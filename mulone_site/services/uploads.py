"""
Image Upload Service

Stores uploaded images in Supabase Storage when credentials are configured,
otherwise in the local upload folder served under /uploads/.
"""

import logging
import os
import time
from urllib.parse import quote, unquote

import requests
from flask import current_app
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

PUBLIC_OBJECT_MARKER = '/storage/v1/object/public/'
LOCAL_URL_PREFIX = '/uploads/'


def _storage_config():
    """Return (base_url, key, bucket) when cloud storage is usable, else None."""
    base_url = (current_app.config.get('SUPABASE_URL') or '').rstrip('/')
    key = current_app.config.get('SUPABASE_SERVICE_ROLE_KEY') or ''
    bucket = (current_app.config.get('SUPABASE_UPLOADS_BUCKET') or '').strip()
    if not base_url.startswith('http') or not key:
        return None
    return base_url, key, bucket


def _auth_headers(key):
    return {'Authorization': f'Bearer {key}', 'apikey': key}


def clean_folder(folder):
    return folder.replace('\\', '/').strip('/')


def build_object_path(folder, original_name, fallback_name):
    """Return `<folder>/<epoch-ms>-<safe name>` for an upload."""
    base_name = (original_name or '').replace('\\', '/').rsplit('/', 1)[-1]
    extension = base_name.rsplit('.', 1)[-1] if '.' in base_name else ''
    extension = secure_filename(extension) or 'jpg'
    safe_name = secure_filename(base_name)
    # Names reduced to a bare word (non-ASCII stems) lose their extension
    if '.' not in safe_name:
        safe_name = secure_filename(f'{fallback_name}.{extension}')
    return f'{clean_folder(folder)}/{int(time.time() * 1000)}-{safe_name}'


def public_storage_url(base_url, bucket, object_path):
    return f'{base_url}/storage/v1/object/public/{bucket}/{quote(object_path)}'


def parse_storage_url(url):
    """Split a Storage public URL into (bucket, object_path), or None."""
    index = url.find(PUBLIC_OBJECT_MARKER)
    if index < 0:
        return None
    raw = url[index + len(PUBLIC_OBJECT_MARKER):]
    bucket, sep, object_path = raw.partition('/')
    if not sep or not bucket or not object_path:
        return None
    return bucket, unquote(object_path)


def _local_path(relative_path):
    """Resolve a path under UPLOAD_FOLDER, refusing anything outside it."""
    root = os.path.realpath(current_app.config['UPLOAD_FOLDER'])
    target = os.path.realpath(os.path.join(root, relative_path))
    if target != root and not target.startswith(root + os.sep):
        return None
    return target


def upload_image(file, folder, fallback_name):
    """Persist an uploaded image and return its public URL.

    Args:
        file: werkzeug FileStorage from request.files (may be None)
        folder: Sub-folder such as ``services/3`` or ``branding``
        fallback_name: Base name used when the client filename is unusable

    Returns:
        Public URL string, or None when nothing was stored
    """
    if file is None or not getattr(file, 'filename', None):
        return None

    content = file.read()
    if not content:
        return None

    object_path = build_object_path(folder, file.filename, fallback_name)
    content_type = file.mimetype or 'application/octet-stream'

    storage = _storage_config()
    if storage and storage[2]:
        base_url, key, bucket = storage
        headers = _auth_headers(key)
        headers.update({'Content-Type': content_type, 'x-upsert': 'false'})
        try:
            resp = requests.post(
                f'{base_url}/storage/v1/object/{bucket}/{quote(object_path)}',
                data=content, headers=headers, timeout=15,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning('Storage upload failed for %s: %s', object_path, exc)
            return None
        if resp.status_code >= 400:
            logger.warning('Storage upload rejected for %s: %s %s',
                           object_path, resp.status_code, resp.text[:200])
            return None
        return public_storage_url(base_url, bucket, object_path)

    if not current_app.config.get('LOCAL_UPLOADS_ENABLED', True):
        logger.info('Local uploads disabled, skipping %s', object_path)
        return None

    local_path = _local_path(object_path)
    if local_path is None:
        return None
    try:
        os.makedirs(os.path.dirname(local_path), exist_ok=True)
        with open(local_path, 'wb') as fh:
            fh.write(content)
    except OSError as exc:
        logger.warning('Could not write upload %s: %s', local_path, exc)
        return None

    return LOCAL_URL_PREFIX + object_path


def delete_uploaded_asset(asset_url):
    """Remove a previously uploaded asset; missing files are ignored."""
    if not asset_url:
        return

    storage = _storage_config()
    parsed = parse_storage_url(asset_url)
    if storage and parsed:
        base_url, key, _ = storage
        bucket, object_path = parsed
        try:
            requests.delete(
                f'{base_url}/storage/v1/object/{bucket}',
                json={'prefixes': [object_path]},
                headers=_auth_headers(key), timeout=15,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning('Storage delete failed for %s: %s', asset_url, exc)
        return

    if not asset_url.startswith(LOCAL_URL_PREFIX):
        return
    if not current_app.config.get('LOCAL_UPLOADS_ENABLED', True):
        return

    local_path = _local_path(asset_url[len(LOCAL_URL_PREFIX):])
    if local_path is None:
        logger.warning('Refusing to delete %s outside the upload folder', asset_url)
        return
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning('Could not delete upload %s: %s', local_path, exc)
