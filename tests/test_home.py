from mulone_site.content import load_home_content
from mulone_site.content.defaults import (
    DEFAULT_HERO, DEFAULT_SERVICES, DEFAULT_TESTIMONIALS,
)
from mulone_site.extensions import db
from mulone_site.models import AppSetting, HeroContent, Project, ProjectImage, Service


def test_home_page_renders_defaults(client):
    r = client.get('/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Mulone Tech' in body
    assert DEFAULT_HERO['title'] in body
    for service in DEFAULT_SERVICES:
        assert service['title'] in body
    assert 'Free assessment' in body


def test_home_page_without_database(app, client):
    app.config['DATABASE_URL'] = ''
    r = client.get('/')
    assert r.status_code == 200
    assert DEFAULT_HERO['title'] in r.get_data(as_text=True)


def test_home_page_with_store_failure(app, client):
    with app.app_context():
        db.drop_all()
    r = client.get('/')
    assert r.status_code == 200
    assert DEFAULT_TESTIMONIALS[0]['quote'] in r.get_data(as_text=True)


def test_null_columns_take_defaults(app):
    with app.app_context():
        db.session.add(HeroContent(id=1, title='Custom title'))
        db.session.commit()
        hero = load_home_content()['hero']
        assert hero['title'] == 'Custom title'
        assert hero['subtitle'] == DEFAULT_HERO['subtitle']


def test_stored_services_replace_defaults(app):
    with app.app_context():
        db.session.add(Service(id=4, icon='unknown', title='Only service', sort_order=0))
        db.session.commit()
        services = load_home_content()['services']
        assert [s['title'] for s in services] == ['Only service']
        assert services[0]['icon'] == 'globe'


def test_projects_carry_gallery(app):
    with app.app_context():
        db.session.add(Project(id=1, title='Portal', sort_order=0))
        db.session.add(ProjectImage(project_id=1, image_url='/uploads/projects/1/b.png', sort_order=1))
        db.session.add(ProjectImage(project_id=1, image_url='/uploads/projects/1/a.png', sort_order=0))
        db.session.commit()
        project = load_home_content()['projects'][0]
        assert [image['image_url'] for image in project['gallery']] == [
            '/uploads/projects/1/a.png', '/uploads/projects/1/b.png']


def test_branding_from_settings(app, client):
    with app.app_context():
        db.session.add(AppSetting(key='branding', value={'brandName': 'Acme', 'brandTagline': ''}))
        db.session.commit()
    body = client.get('/').get_data(as_text=True)
    assert 'Acme' in body
    assert 'Smart digital solutions' in body
