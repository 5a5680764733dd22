"""
Admin Routes

Content management portal: login, dashboard, CRUD for every content
collection, inquiry review and export, site text and the notification bell.
"""

import logging

from flask import (
    Response, abort, flash, jsonify, redirect, render_template, request, url_for,
)
from flask_login import current_user

from fountaingate.admin import admin_bp
from fountaingate.admin.collections import (
    COLLECTIONS, get_collection, manager_for, record_from_form,
)
from fountaingate.admin.decorators import admin_required
from fountaingate.admin.identity import get_auth, get_portal
from fountaingate.services import (
    CONTENT_SECTIONS, INQUIRY_STATUSES, BackendError, EntityManager, SiteContentManager,
    export_filename, format_time_ago, get_backend, get_content_cache, get_feed,
    inquiries_to_csv,
)

logger = logging.getLogger(__name__)

INQUIRY_KINDS = {
    'contact': {
        'collection': 'contact_inquiries',
        'title': 'Contact Inquiries',
        'label': 'inquiry',
        'name_field': 'name',
    },
    'admission': {
        'collection': 'admission_inquiries',
        'title': 'Admission Inquiries',
        'label': 'admission inquiry',
        'name_field': 'parent_name',
    },
}

DASHBOARD_COUNTS = (
    ('contact_inquiries', 'contact_inquiries'),
    ('news', 'news_posts'),
    ('events', 'events'),
    ('gallery_items', 'gallery_items'),
    ('admission_inquiries', 'admission_inquiries'),
)


def _safe_next(default):
    target = request.args.get('next') or request.form.get('next')
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return default


def _confirmed():
    return request.form.get('confirm') == 'yes'


@admin_bp.context_processor
def inject_admin_nav():
    return dict(admin_collections=COLLECTIONS)


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------

@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Primary admin login (email + password)."""
    if current_user.is_authenticated:
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '')
        password = request.form.get('password', '')

        if not email.strip() or not password:
            flash('Please enter both email and password.', 'danger')
            return render_template('admin/login.html', email=email)

        auth = get_auth()
        if auth.login(email, password):
            flash(f'Welcome, {auth.user["name"]}!', 'success')
            return redirect(_safe_next(url_for('admin.dashboard')))

        flash('Invalid email or password.', 'danger')
        return render_template('admin/login.html', email=email)

    return render_template('admin/login.html', email='')


@admin_bp.route('/logout')
def logout():
    """End every admin session held by this browser."""
    get_auth().teardown()
    get_portal().end()
    flash('You have been logged out of the admin panel.', 'info')
    return redirect(url_for('admin.login'))


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

@admin_bp.route('/')
@admin_bp.route('/dashboard')
@admin_required
def dashboard():
    """Overview: collection counts, latest contact inquiries, unread notifications."""
    backend = get_backend()
    cache = get_content_cache()

    stats = {}
    for name, collection in DASHBOARD_COUNTS:
        if cache is not None and collection in ('news_posts', 'events'):
            stats[name] = len(cache.news if collection == 'news_posts' else cache.events)
            continue
        try:
            stats[name] = backend.count(collection)
        except BackendError as e:
            logger.error('Error counting %s: %s', collection, e)
            stats[name] = 0

    try:
        recent_inquiries = backend.select(
            'contact_inquiries', order_by='created_at', descending=True, limit=5
        )
    except BackendError as e:
        logger.error('Error fetching recent inquiries: %s', e)
        recent_inquiries = []

    return render_template('admin/dashboard.html',
                           stats=stats,
                           recent_inquiries=recent_inquiries,
                           unread_count=get_feed().unread_count,
                           collections=COLLECTIONS,
                           admin_name=current_user.name)


# -----------------------------------------------------------------------------
# Generic content collections
# -----------------------------------------------------------------------------

@admin_bp.route('/content/<collection>')
@admin_required
def content_list(collection):
    definition = get_collection(collection)
    manager = manager_for(collection)
    manager.list()

    filters = {name: request.args.get(name, 'all') for name in definition.get('filters', [])}
    items = manager.filter(**filters)
    filter_options = {name: manager.distinct(name) for name in filters}

    return render_template('admin/collection.html',
                           collection=collection,
                           definition=definition,
                           items=items,
                           total=len(manager.items),
                           filters=filters,
                           filter_options=filter_options)


def _render_editor(collection, definition, record, status=200):
    return render_template('admin/edit.html',
                           collection=collection,
                           definition=definition,
                           record=record), status


@admin_bp.route('/content/<collection>/new', methods=['GET', 'POST'])
@admin_required
def content_new(collection):
    definition = get_collection(collection)
    manager = manager_for(collection)
    manager.list()

    if request.method == 'POST':
        record, errors = record_from_form(definition, request.form)
        if errors:
            for error in errors:
                flash(error, 'danger')
            return _render_editor(collection, definition, record, 400)

        result = manager.save(record)
        if result:
            flash(result.message, 'success')
            return redirect(url_for('admin.content_list', collection=collection))
        flash(result.message, 'danger')
        return _render_editor(collection, definition, manager.editing)

    return _render_editor(collection, definition, manager.start_create())


@admin_bp.route('/content/<collection>/<record_id>/edit', methods=['GET', 'POST'])
@admin_required
def content_edit(collection, record_id):
    definition = get_collection(collection)
    manager = manager_for(collection)
    manager.list()
    existing = manager.get(record_id)
    if existing is None:
        abort(404)

    if request.method == 'POST':
        record, errors = record_from_form(definition, request.form, record_id=record_id)
        if 'order_index' in existing:
            record['order_index'] = existing['order_index']
        if errors:
            for error in errors:
                flash(error, 'danger')
            return _render_editor(collection, definition, record, 400)

        result = manager.save(record)
        if result:
            flash(result.message, 'success')
            return redirect(url_for('admin.content_list', collection=collection))
        flash(result.message, 'danger')
        return _render_editor(collection, definition, manager.editing)

    return _render_editor(collection, definition, manager.start_edit(existing))


@admin_bp.route('/content/<collection>/<record_id>/delete', methods=['GET', 'POST'])
@admin_required
def content_delete(collection, record_id):
    """GET asks for confirmation; POST deletes only with confirm=yes."""
    definition = get_collection(collection)
    manager = manager_for(collection)
    manager.list()
    record = manager.get(record_id)
    if record is None:
        abort(404)

    if request.method == 'GET':
        return render_template('admin/confirm_delete.html',
                               label=definition['label'],
                               summary=[record.get(name) for name in definition['summary']],
                               cancel_url=url_for('admin.content_list', collection=collection))

    result = manager.delete(record_id, confirm=_confirmed)
    if result.cancelled:
        flash('Nothing was deleted.', 'info')
    else:
        flash(result.message, 'success' if result else 'danger')
    return redirect(url_for('admin.content_list', collection=collection))


# -----------------------------------------------------------------------------
# Inquiries
# -----------------------------------------------------------------------------

def _inquiry_manager(kind):
    config = INQUIRY_KINDS.get(kind)
    if config is None:
        abort(404)
    manager = EntityManager(get_backend(), config['collection'],
                            order_by='created_at', descending=True, label=config['label'])
    manager.list()
    return config, manager


@admin_bp.route('/inquiries/<kind>')
@admin_required
def inquiries(kind):
    config, manager = _inquiry_manager(kind)
    status = request.args.get('status', 'all')
    if status != 'all' and status not in INQUIRY_STATUSES:
        status = 'all'

    return render_template('admin/inquiries.html',
                           kind=kind,
                           config=config,
                           items=manager.filter(status=status),
                           status=status,
                           statuses=INQUIRY_STATUSES,
                           counts=manager.counts_by('status', INQUIRY_STATUSES))


@admin_bp.route('/inquiries/<kind>/export.csv')
@admin_required
def export_inquiries(kind):
    _, manager = _inquiry_manager(kind)
    return Response(
        inquiries_to_csv(manager.items, kind),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={export_filename(kind)}'}
    )


@admin_bp.route('/inquiries/<kind>/<record_id>')
@admin_required
def inquiry_detail(kind, record_id):
    config, manager = _inquiry_manager(kind)
    inquiry = manager.get(record_id)
    if inquiry is None:
        abort(404)
    return render_template('admin/inquiry_detail.html',
                           kind=kind,
                           config=config,
                           inquiry=inquiry,
                           statuses=INQUIRY_STATUSES)


@admin_bp.route('/inquiries/<kind>/<record_id>/status', methods=['POST'])
@admin_required
def inquiry_status(kind, record_id):
    _, manager = _inquiry_manager(kind)
    if manager.get(record_id) is None:
        abort(404)

    result = manager.set_status(record_id, request.form.get('status', ''))
    flash(result.message, 'success' if result else 'danger')
    return redirect(_safe_next(url_for('admin.inquiry_detail', kind=kind, record_id=record_id)))


@admin_bp.route('/inquiries/<kind>/<record_id>/delete', methods=['GET', 'POST'])
@admin_required
def inquiry_delete(kind, record_id):
    config, manager = _inquiry_manager(kind)
    inquiry = manager.get(record_id)
    if inquiry is None:
        abort(404)

    if request.method == 'GET':
        return render_template('admin/confirm_delete.html',
                               label=config['label'],
                               summary=[inquiry.get(config['name_field']), inquiry.get('email')],
                               cancel_url=url_for('admin.inquiries', kind=kind))

    result = manager.delete(record_id, confirm=_confirmed)
    if result.cancelled:
        flash('Nothing was deleted.', 'info')
    else:
        flash(result.message, 'success' if result else 'danger')
    return redirect(url_for('admin.inquiries', kind=kind))


# -----------------------------------------------------------------------------
# Site text
# -----------------------------------------------------------------------------

@admin_bp.route('/site-content')
@admin_required
def site_content():
    content = SiteContentManager(get_backend()).load()
    return render_template('admin/site_content.html', sections=CONTENT_SECTIONS, content=content)


@admin_bp.route('/site-content/<section>', methods=['GET', 'POST'])
@admin_required
def site_content_edit(section):
    definition = CONTENT_SECTIONS.get(section)
    if definition is None:
        abort(404)
    manager = SiteContentManager(get_backend())
    keys = [f['key'] for f in definition['fields']]

    if request.method == 'POST':
        values = {key: request.form.get(key, '').strip() for key in keys}
        result = manager.save(section, values)
        if result:
            flash(result.message, 'success')
            return redirect(url_for('admin.site_content'))
        flash(result.message, 'danger')
    else:
        content = manager.load(keys=keys)
        values = {key: content.get(key, '') for key in keys}

    return render_template('admin/site_content_edit.html',
                           section=section, definition=definition, values=values)


# -----------------------------------------------------------------------------
# Notification bell (JSON)
# -----------------------------------------------------------------------------

def _notifications_payload(feed):
    return {
        'unread_count': feed.unread_count,
        'notifications': [
            dict(n, time_ago=format_time_ago(n['created_at'])) for n in feed.notifications
        ],
    }


@admin_bp.route('/notifications')
@admin_required
def notifications():
    feed = get_feed()
    if request.args.get('refresh'):
        feed.refresh()
    return jsonify(_notifications_payload(feed))


@admin_bp.route('/notifications/<notification_id>/read', methods=['POST'])
@admin_required
def notification_read(notification_id):
    feed = get_feed()
    feed.mark_read(notification_id)
    return jsonify(_notifications_payload(feed))


@admin_bp.route('/notifications/read-all', methods=['POST'])
@admin_required
def notifications_read_all():
    feed = get_feed()
    feed.mark_all_read()
    return jsonify(_notifications_payload(feed))
