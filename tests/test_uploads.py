import io
import os
from urllib.parse import parse_qs, urlparse

import requests
from werkzeug.datastructures import FileStorage

from mulone_site.services.uploads import (
    build_object_path, delete_uploaded_asset, parse_storage_url, upload_image,
)
from mulone_site.extensions import db
from mulone_site.models import AdminProfile, AppSetting, Project, ProjectImage, Service


def make_file(content=b'\x89PNG fake', filename='Logo Final.png', mimetype='image/png'):
    return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=mimetype)


class FakeResponse:
    def __init__(self, status_code=200, text=''):
        self.status_code = status_code
        self.text = text


def test_build_object_path():
    path = build_object_path('/services/3/', '../../etc/passwd', 'image')
    folder, name = path.rsplit('/', 1)
    assert folder == 'services/3'
    assert name.endswith('-image.jpg')
    assert '..' not in path


def test_build_object_path_fallback_name():
    path = build_object_path('branding', '???', 'logo')
    assert path.endswith('-logo.jpg')


def test_non_ascii_filename_keeps_extension():
    assert build_object_path('services/1', 'фото.png', 'image').endswith('-image.png')
    assert build_object_path('services/1', 'C:\\Users\\фото.JPEG', 'image').endswith('-image.JPEG')


def test_parse_storage_url():
    url = 'https://abc.supabase.co/storage/v1/object/public/uploads/projects/1/1700-a%20b.png'
    assert parse_storage_url(url) == ('uploads', 'projects/1/1700-a b.png')
    assert parse_storage_url('/uploads/projects/1/x.png') is None


def test_local_upload_and_delete(app):
    with app.test_request_context():
        url = upload_image(make_file(), 'branding', 'logo')
        assert url.startswith('/uploads/branding/')
        assert url.endswith('-Logo_Final.png')

        path = os.path.join(app.config['UPLOAD_FOLDER'], url[len('/uploads/'):])
        with open(path, 'rb') as fh:
            assert fh.read() == b'\x89PNG fake'

        delete_uploaded_asset(url)
        assert not os.path.exists(path)
        # deleting twice is harmless
        delete_uploaded_asset(url)



def test_non_ascii_upload_keeps_extension(app):
    with app.test_request_context():
        url = upload_image(make_file(filename='фото.png'), 'services/1', 'image')
    assert url.startswith('/uploads/services/1/')
    assert url.endswith('-image.png')

def test_uploaded_file_is_served(app, client):
    with app.test_request_context():
        url = upload_image(make_file(b'image-bytes'), 'profile', 'avatar')
    r = client.get(url)
    assert r.status_code == 200
    assert r.data == b'image-bytes'


def test_empty_upload_ignored(app):
    with app.test_request_context():
        assert upload_image(None, 'branding', 'logo') is None
        assert upload_image(make_file(b''), 'branding', 'logo') is None
        assert upload_image(make_file(filename=''), 'branding', 'logo') is None


def test_local_uploads_disabled(app):
    app.config['LOCAL_UPLOADS_ENABLED'] = False
    with app.test_request_context():
        assert upload_image(make_file(), 'branding', 'logo') is None


def test_delete_refuses_paths_outside_folder(app, tmp_path):
    outside = tmp_path / 'secret.txt'
    outside.write_text('keep me')
    with app.test_request_context():
        delete_uploaded_asset('/uploads/../secret.txt')
    assert outside.exists()


def test_cloud_upload(app, monkeypatch):
    calls = []

    def fake_post(url, data=None, headers=None, timeout=None):
        calls.append((url, data, headers))
        return FakeResponse(200)

    monkeypatch.setattr('mulone_site.services.uploads.requests.post', fake_post)
    app.config.update(SUPABASE_URL='https://abc.supabase.co/', SUPABASE_SERVICE_ROLE_KEY='service-key')

    with app.test_request_context():
        url = upload_image(make_file(), 'services/2', 'image')

    assert url.startswith('https://abc.supabase.co/storage/v1/object/public/uploads/services/2/')
    post_url, data, headers = calls[0]
    assert post_url.startswith('https://abc.supabase.co/storage/v1/object/uploads/services/2/')
    assert data == b'\x89PNG fake'
    assert headers['Authorization'] == 'Bearer service-key'
    assert headers['Content-Type'] == 'image/png'


def test_cloud_upload_failure(app, monkeypatch):
    def failing_post(url, data=None, headers=None, timeout=None):
        raise requests.exceptions.ConnectionError('offline')

    monkeypatch.setattr('mulone_site.services.uploads.requests.post', failing_post)
    app.config.update(SUPABASE_URL='https://abc.supabase.co', SUPABASE_SERVICE_ROLE_KEY='service-key')
    with app.test_request_context():
        assert upload_image(make_file(), 'services/2', 'image') is None

    monkeypatch.setattr('mulone_site.services.uploads.requests.post',
                        lambda *a, **kw: FakeResponse(400, 'Bucket not found'))
    with app.test_request_context():
        assert upload_image(make_file(), 'services/2', 'image') is None


def test_cloud_delete(app, monkeypatch):
    calls = []

    def fake_delete(url, json=None, headers=None, timeout=None):
        calls.append((url, json))
        return FakeResponse(200)

    monkeypatch.setattr('mulone_site.services.uploads.requests.delete', fake_delete)
    app.config.update(SUPABASE_URL='https://abc.supabase.co', SUPABASE_SERVICE_ROLE_KEY='service-key')
    with app.test_request_context():
        delete_uploaded_asset('https://abc.supabase.co/storage/v1/object/public/uploads/projects/1/a.png')

    assert calls == [('https://abc.supabase.co/storage/v1/object/uploads', {'prefixes': ['projects/1/a.png']})]


def test_project_gallery_upload_and_delete(app, admin_client):
    data = {
        'projects_count': '1',
        'projects_id_0': '1', 'projects_title_0': 'Portal', 'projects_tag_0': 'B2B',
        'projects_image_url_0': '', 'projects_description_0': 'New portal',
        'projects_images_files_0': [make_file(b'one', 'one.png'), make_file(b'two', 'two.png')],
    }
    r = admin_client.post('/admin/projects', data=data, content_type='multipart/form-data')
    assert r.status_code == 303

    with app.app_context():
        project = db.session.get(Project, 1)
        images = project.images
        assert len(images) == 2
        # first gallery photo becomes the main image
        assert project.image_url == images[0].image_url
        first_id, first_url = images[0].id, images[0].image_url
        second_url = images[1].image_url

    first_path = os.path.join(app.config['UPLOAD_FOLDER'], first_url[len('/uploads/'):])
    assert os.path.exists(first_path)

    r = admin_client.post(f'/admin/projects/1/images/{first_id}/delete')
    assert r.status_code == 303
    assert not os.path.exists(first_path)

    with app.app_context():
        assert db.session.get(Project, 1).image_url == second_url
        assert ProjectImage.query.count() == 1


def test_delete_project_removes_gallery(app, admin_client):
    with app.app_context():
        db.session.add(Project(id=1, title='Keep', sort_order=0))
        db.session.add(Project(id=2, title='Drop', sort_order=1))
        db.session.commit()

    data = {
        'projects_count': '1',
        'projects_id_0': '2', 'projects_title_0': 'Drop', 'projects_tag_0': '',
        'projects_image_url_0': '', 'projects_description_0': '',
        'projects_images_files_0': make_file(b'photo', 'photo.png'),
    }
    admin_client.post('/admin/projects', data=data, content_type='multipart/form-data')
    with app.app_context():
        url = ProjectImage.query.one().image_url
    path = os.path.join(app.config['UPLOAD_FOLDER'], url[len('/uploads/'):])
    assert os.path.exists(path)

    r = admin_client.post('/admin/projects/2/delete')
    assert r.status_code == 303
    assert not os.path.exists(path)
    with app.app_context():
        assert ProjectImage.query.count() == 0
        assert [p.id for p in Project.query.all()] == [1]


def uploaded_files(app):
    return [name for _, _, names in os.walk(app.config['UPLOAD_FOLDER']) for name in names]


def drop_table(app, model):
    with app.app_context():
        model.__table__.drop(db.engine)


def toast_type(response):
    return parse_qs(urlparse(response.headers['Location']).query)['toastType'][0]


def test_failed_branding_save_removes_logo(app, admin_client):
    drop_table(app, AppSetting)
    r = admin_client.post('/admin/settings/branding', data={
        'brand_name': 'Mulone', 'brand_logo_file': make_file(),
    }, content_type='multipart/form-data')
    assert r.status_code == 303
    assert toast_type(r) == 'error'
    assert uploaded_files(app) == []


def test_failed_profile_save_removes_avatar(app, admin_client):
    drop_table(app, AdminProfile)
    r = admin_client.post('/admin/content/profile', data={
        'profile_display_name': 'Ana', 'profile_avatar_file': make_file(),
    }, content_type='multipart/form-data')
    assert toast_type(r) == 'error'
    assert uploaded_files(app) == []


def test_failed_services_save_removes_images(app, admin_client):
    drop_table(app, Service)
    r = admin_client.post('/admin/services', data={
        'services_count': '1',
        'services_id_0': '1', 'services_order_0': '0', 'services_icon_0': 'globe',
        'services_title_0': 'Websites', 'services_image_url_0': '', 'services_description_0': '',
        'services_image_file_0': make_file(),
    }, content_type='multipart/form-data')
    assert toast_type(r) == 'error'
    assert uploaded_files(app) == []


def test_failed_projects_save_removes_gallery(app, admin_client):
    # gallery ordering query fails without its table
    drop_table(app, ProjectImage)
    r = admin_client.post('/admin/projects', data={
        'projects_count': '1',
        'projects_id_0': '1', 'projects_title_0': 'Portal', 'projects_tag_0': '',
        'projects_image_url_0': '', 'projects_description_0': '',
        'projects_image_file_0': make_file(b'main', 'main.png'),
        'projects_images_files_0': [make_file(b'one', 'one.png'), make_file(b'two', 'two.png')],
    }, content_type='multipart/form-data')
    assert toast_type(r) == 'error'
    assert uploaded_files(app) == []
