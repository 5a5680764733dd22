"""
Site Routes

Public pages of the school website.
"""

from flask import flash, redirect, render_template, request, url_for

from fountaingate.site import site_bp
from fountaingate.site.services import (
    get_about_data, get_academics_data, get_admissions_data, get_contact_data,
    get_gallery_data, get_home_data, get_news_and_events,
    submit_admission_inquiry, submit_contact_inquiry,
)


@site_bp.route('/')
def home():
    return render_template('site/home.html', **get_home_data())


@site_bp.route('/about')
def about():
    return render_template('site/about.html', **get_about_data())


@site_bp.route('/academics')
def academics():
    return render_template('site/academics.html', **get_academics_data())


@site_bp.route('/admissions', methods=['GET', 'POST'])
def admissions():
    """Admissions information and the enrolment inquiry form"""
    form = {}
    if request.method == 'POST':
        result, form = submit_admission_inquiry(request.form)
        if result:
            flash(result.message, 'success')
            return redirect(url_for('site.admissions'))
        flash(result.message, 'danger')

    return render_template('site/admissions.html', form=form, **get_admissions_data())


@site_bp.route('/news')
def news():
    return render_template('site/news.html', **get_news_and_events())


@site_bp.route('/gallery')
def gallery():
    """Gallery with photo/video and category filters"""
    data = get_gallery_data(
        media_type=request.args.get('type', 'all'),
        category=request.args.get('category', 'all'),
    )
    return render_template('site/gallery.html', **data)


@site_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    form = {}
    if request.method == 'POST':
        result, form = submit_contact_inquiry(request.form)
        if result:
            flash(result.message, 'success')
            return redirect(url_for('site.contact'))
        flash(result.message, 'danger')

    return render_template('site/contact.html', form=form, **get_contact_data())
