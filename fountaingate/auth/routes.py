"""
Auth Routes

The older admin login screen: username + password, with a session that
expires after ``PORTAL_SESSION_HOURS``. Kept alongside the email login.
"""

from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user

from fountaingate.auth import auth_bp
from fountaingate.admin.identity import get_portal


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Legacy portal login route"""
    if current_user.is_authenticated:
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        username = request.form.get('username', '')
        password = request.form.get('password', '')

        if not username or not password:
            flash('Please provide both username and password.', 'danger')
            return render_template('auth/login.html')

        config = current_app.config
        if username == config['ADMIN_USERNAME'] and password == config['ADMIN_PASSWORD']:
            get_portal().start(username)
            flash(f'Welcome back, {username}!', 'success')
            return redirect(url_for('admin.dashboard'))

        flash('Invalid username or password', 'danger')

    return render_template('auth/login.html')


@auth_bp.route('/logout')
def logout():
    """Legacy portal logout route"""
    get_portal().end()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('auth.login'))
