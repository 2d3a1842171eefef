"""
Admin back-office screens.

Each screen is wrapped by :func:`~clinic.views.decorators.admin_screen`,
which resolves the auth gate and only calls the view for admins.  The
view gets the gate injected and builds its table store from it.
Collections are handled by :class:`~clinic.services.crud.CollectionState`
and the singletons by :class:`~clinic.services.singletons.SingletonEditor`;
notifications end up in Django messages.  A successful POST redirects
back to the same URL; a rejected form is rendered again with the
entered values.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from ..exceptions import AuthError, StoreError, ValidationFailed
from ..models import Medicine
from ..serializers import validate_or_raise
from ..serializers.auth import CredentialsSerializer, SignInSerializer
from ..serializers.profile import WEEKDAYS
from ..services import identity, messaging
from ..services.audit import log_action
from ..services.collections import CONSULTATIONS, INQUIRIES, MEDICINES, SERVICES, open_collection
from ..services.content import load_seo, save_seo
from ..services.dashboard import admin_stats
from ..services.notify import MessagesNotifier
from ..services.singletons import profile_editor, settings_editor
from ..services.uploads import ImageUploader, remove
from .decorators import admin_screen, gate_for

logger = logging.getLogger(__name__)

NO_ACCESS = 'You do not have admin access. Please contact the administrator.'

MEDICINE_FIELDS = ('name', 'category', 'price', 'stock_status', 'description', 'used_for', 'dosage_notes', 'is_active')
SERVICE_FIELDS = ('title', 'description', 'icon', 'is_enabled', 'sort_order')


def _pick(post, fields) -> dict:
    return {f: post.get(f) for f in fields if f in post}


def _back(request):
    return redirect(request.get_full_path())


class FilesRejected(Exception):
    """The files posted with a form were refused; the form is not saved."""


# ---------------------------------------------------------------------
# Sign-in / sign-up / sign-out
# ---------------------------------------------------------------------
@require_http_methods(['GET', 'POST'])
def login_page(request):
    gate = gate_for(request)
    state = gate.resolve()
    context = {'mode': 'login', 'email': '', 'error': None}
    if request.method == 'GET':
        if state.user is not None:
            if state.is_admin:
                return redirect('admin-dashboard')
            context['error'] = NO_ACCESS
        return render(request, 'clinic/admin/login.html', context)

    mode = 'signup' if request.POST.get('mode') == 'signup' else 'login'
    context.update(mode=mode, email=request.POST.get('email', ''))
    try:
        creds = validate_or_raise(CredentialsSerializer if mode == 'signup' else SignInSerializer, request.POST)
    except ValidationFailed as exc:
        context['error'] = exc.message
        return render(request, 'clinic/admin/login.html', context, status=400)

    if mode == 'signup':
        try:
            gate.sign_up(creds['email'], creds['password'])
        except AuthError as exc:
            context['error'] = exc.message
            return render(request, 'clinic/admin/login.html', context, status=400)
        messages.success(request, 'Account created: An administrator must grant access before you can sign in to the admin panel.')
        return redirect(settings.LOGIN_URL)

    ip = request.META.get('REMOTE_ADDR')
    try:
        user = gate.sign_in(creds['email'], creds['password'])
    except AuthError as exc:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'email': creds['email'], 'ip': ip})
        context['error'] = exc.message
        return render(request, 'clinic/admin/login.html', context, status=400)
    log_action(user=user, action='login', object_type='user', object_id=user.pk, detail={'result': 'ok', 'ip': ip})
    if gate.is_admin:
        return redirect('admin-dashboard')
    context['error'] = NO_ACCESS
    return render(request, 'clinic/admin/login.html', context, status=403)


@require_POST
def logout_page(request):
    gate_for(request).sign_out()
    return redirect(settings.LOGIN_URL)


# ---------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------
@admin_screen
def dashboard(request, gate):
    try:
        stats = admin_stats(gate.store())
    except StoreError as exc:
        logger.warning('dashboard stats failed: %s', exc)
        MessagesNotifier(request).error('Error', 'Failed to load dashboard data.')
        stats = None
    return render(request, 'clinic/admin/dashboard.html', {'stats': stats})


# ---------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------
def _profile_form(post) -> dict:
    data = _pick(post, ('name', 'qualification', 'photo_url', 'about', 'years_of_experience', 'contact_phone',
                        'contact_email', 'whatsapp_number', 'clinic_address'))
    if data.get('years_of_experience') == '':
        data['years_of_experience'] = None
    if 'specializations' in post:
        data['specializations'] = [s for s in post.get('specializations', '').split(',')]
    timings = {day: post.get(f'timing_{day}') for day in WEEKDAYS if f'timing_{day}' in post}
    if timings:
        data['clinic_timings'] = timings
    return data


@admin_screen
@require_http_methods(['GET', 'POST'])
def profile(request, gate):
    notifier = MessagesNotifier(request)
    editor = profile_editor(gate.store(), notifier)
    editor.open()
    if request.method == 'POST':
        data = _profile_form(request.POST)
        if 'clinic_timings' in data:
            # days left out of the form keep their hours
            data['clinic_timings'] = {**((editor.data or {}).get('clinic_timings') or {}), **data['clinic_timings']}
        current = data.get('photo_url', (editor.data or {}).get('photo_url'))
        if request.POST.get('remove_photo'):
            data['photo_url'] = remove(current, multiple=False)
        elif request.FILES.getlist('photo'):
            uploader = ImageUploader()
            data['photo_url'] = uploader.upload_into(
                current, request.FILES.getlist('photo'), folder='profile', notifier=notifier
            )
            if uploader.error:
                return render(request, 'clinic/admin/profile.html',
                              {'profile': {**(editor.data or {}), **data}, 'errors': {}, 'weekdays': WEEKDAYS},
                              status=400)
        if editor.save(data) is not None:
            return _back(request)
        return render(request, 'clinic/admin/profile.html',
                      {'profile': {**(editor.data or {}), **data}, 'errors': editor.field_errors,
                       'weekdays': WEEKDAYS}, status=400)
    return render(request, 'clinic/admin/profile.html',
                  {'profile': editor.data, 'errors': {}, 'weekdays': WEEKDAYS})


# ---------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------
def _filters(request) -> dict:
    return {'query': request.GET.get('q', ''), 'status': request.GET.get('status', 'all')}


def _mutate(request, state, fields, toggle_field=None, prepare=None):
    """Apply the POSTed action.

    Returns ``(redirect, pending_delete)``: whether the page should redirect,
    and the row awaiting delete confirmation if any.
    """
    post = request.POST
    action = post.get('action')
    row_id = post.get('id')
    if action == 'create':
        data = _pick(post, fields)
        if prepare:
            try:
                data = prepare(data, None)
            except FilesRejected:
                state.editing = data
                return False, None
        return state.create(data) is not None, None
    if action == 'update':
        data = _pick(post, fields)
        if prepare:
            try:
                data = prepare(data, state.get(row_id))
            except FilesRejected:
                state.editing = {**data, 'id': row_id}
                return False, None
        return state.update(row_id, data) is not None, None
    if action == 'toggle' and toggle_field:
        state.toggle(row_id, toggle_field)
        return True, None
    if action == 'delete':
        if post.get('confirm') != 'yes':
            # ask first; nothing is sent to the store
            return False, state.get(row_id)
        state.delete(row_id, confirmed=True)
        return True, None
    messages.error(request, 'Unknown action.')
    return True, None


def _collection_page(request, gate, config, template, fields, *, toggle_field=None, prepare=None, decorate=None,
                     extra=None, status=200, mutate=True):
    notifier = MessagesNotifier(request)
    state = open_collection(config, gate.store(), notifier, **_filters(request))
    pending_delete = None
    if mutate and request.method == 'POST':
        done, pending_delete = _mutate(request, state, fields, toggle_field, prepare)
        if done:
            return _back(request)
        if state.editing is not None:
            status = 400
    rows = state.visible
    if decorate:
        rows = [decorate(row) for row in rows]
    context = {
        'state': state,
        'rows': rows,
        'query': state.query,
        'status_filter': state.status_filter,
        'statuses': config.statuses,
        'editing': state.editing,
        'errors': state.field_errors,
        'pending_delete': pending_delete,
    }
    context.update(extra or {})
    return render(request, template, context, status=status)


def _admin_settings_row(gate):
    try:
        return gate.store().maybe_single('admin_settings')
    except StoreError as exc:
        logger.warning('reading admin settings failed: %s', exc)
        return None


@admin_screen
@require_http_methods(['GET', 'POST'])
def consultations(request, gate):
    settings_row = _admin_settings_row(gate)

    def decorate(row):
        return {**row, 'reply_link': messaging.consultation_reply_link(row, settings_row)}

    return _collection_page(request, gate, CONSULTATIONS, 'clinic/admin/consultations.html',
                            ('status', 'doctor_notes'), decorate=decorate)


@admin_screen
@require_http_methods(['GET', 'POST'])
def inquiries(request, gate):
    settings_row = _admin_settings_row(gate)

    def decorate(row):
        return {**row, 'reply_link': messaging.inquiry_reply_link(row, settings_row)}

    return _collection_page(request, gate, INQUIRIES, 'clinic/admin/inquiries.html',
                            ('status', 'notes'), decorate=decorate)


@admin_screen
@require_http_methods(['GET', 'POST'])
def medicines(request, gate):
    notifier = MessagesNotifier(request)

    def prepare(data, current):
        post = request.POST
        # the form marks its image list so that an emptied list still counts
        if 'images_field' in post:
            images = post.getlist('images')
        else:
            images = list((current or {}).get('images') or [])
        if post.get('remove_image', '').isdigit():
            images = remove(images, int(post['remove_image']), multiple=True)
        files = request.FILES.getlist('image_files')
        if files:
            uploader = ImageUploader()
            images = uploader.upload_into(images, files, folder='medicines', multiple=True, notifier=notifier)
            if uploader.error:
                raise FilesRejected(uploader.error)
        data['images'] = images
        return data

    return _collection_page(request, gate, MEDICINES, 'clinic/admin/medicines.html', MEDICINE_FIELDS,
                            toggle_field='is_active', prepare=prepare, extra={
                                'categories': [c for c, _ in Medicine.CATEGORY_CHOICES],
                                'stock_choices': [s for s, _ in Medicine.STOCK_CHOICES],
                            })


# ---------------------------------------------------------------------
# Content: services and SEO
# ---------------------------------------------------------------------
@admin_screen
@require_http_methods(['GET', 'POST'])
def content(request, gate):
    store = gate.store()
    if request.method == 'POST' and request.POST.get('form') == 'seo':
        posted = _pick(request.POST, ('title', 'description'))
        if save_seo(store, posted, MessagesNotifier(request)) is not None:
            return _back(request)
        return _collection_page(request, gate, SERVICES, 'clinic/admin/content.html', SERVICE_FIELDS,
                                toggle_field='is_enabled', extra={'seo_form': posted}, status=400, mutate=False)
    return _collection_page(request, gate, SERVICES, 'clinic/admin/content.html', SERVICE_FIELDS,
                            toggle_field='is_enabled', extra={'seo_form': load_seo(store) or {}})


# ---------------------------------------------------------------------
# Settings and account
# ---------------------------------------------------------------------
SETTINGS_FLAGS = {
    'maintenance_mode': 'Maintenance mode',
    'medicine_selling_enabled': 'Medicine selling',
    'email_notifications': 'Email notifications',
    'sms_notifications': 'SMS notifications',
    'new_consultation_notification': 'Notify on new consultations',
    'new_inquiry_notification': 'Notify on new inquiries',
}


def _change_email(request, user, notifier) -> None:
    def confirm_url(token):
        return request.build_absolute_uri(reverse('admin-confirm-email', args=[token]))

    try:
        identity.update_email(user, request.POST.get('new_email', ''), build_confirm_url=confirm_url)
    except AuthError as exc:
        notifier.error('Error', exc.message)
        return
    log_action(user=user, action='account.email_change_requested', object_type='user', object_id=user.pk)
    notifier.success('Confirmation Sent', 'Check your new email address to confirm the change.')


def _change_password(request, user, notifier) -> None:
    try:
        identity.update_password(user, request.POST.get('new_password', ''), request.POST.get('confirm_password', ''))
    except AuthError as exc:
        notifier.error('Error', exc.message)
        return
    # keep this session signed in under the new password hash
    update_session_auth_hash(request, user)
    log_action(user=user, action='account.password_changed', object_type='user', object_id=user.pk)
    notifier.success('Password Updated', 'Your password has been changed.')


@admin_screen
@require_http_methods(['GET', 'POST'])
def settings_page(request, gate):
    notifier = MessagesNotifier(request)
    form = request.POST.get('form') if request.method == 'POST' else None
    if form == 'email':
        _change_email(request, gate.user, notifier)
        return _back(request)
    if form == 'password':
        _change_password(request, gate.user, notifier)
        return _back(request)
    editor = settings_editor(gate.store(), notifier)
    editor.open()
    context = {'settings': editor.data, 'errors': {}, 'flags': SETTINGS_FLAGS.items(), 'account': gate.user}
    if request.method == 'POST':
        data = _pick(request.POST, ('whatsapp_number', 'consultation_message_template', 'medicine_inquiry_template'))
        data.update({flag: flag in request.POST.getlist('flags') for flag in SETTINGS_FLAGS})
        if editor.save(data) is not None:
            return _back(request)
        context.update(settings={**(editor.data or {}), **data}, errors=editor.field_errors)
        return render(request, 'clinic/admin/settings.html', context, status=400)
    return render(request, 'clinic/admin/settings.html', context)


def confirm_email(request, token):
    try:
        user = identity.confirm_email_change(token)
    except AuthError as exc:
        messages.error(request, f'Error: {exc.message}')
        return redirect(settings.LOGIN_URL)
    log_action(user=user, action='account.email_changed', object_type='user', object_id=user.pk)
    messages.success(request, f'Email Updated: Your login email is now {user.email}.')
    return redirect('admin-settings')
