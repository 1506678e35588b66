import logging
import os
from functools import wraps

from flask import Blueprint, Flask, flash, jsonify, redirect, render_template, request, session, url_for

from config import Config
from ledger import auth, engine, messages, store
from ledger.errors import InfrastructureError, LedgerError, NotFound, ValidationError
from ledger.filters import ItemFilter
from logging_config import configure_logging
from models import ItemType, db

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)
items_bp = Blueprint('items', __name__, url_prefix='/items')
api_bp = Blueprint('api', __name__, url_prefix='/api')


def create_app(test_config=None):
    app = Flask(__name__, template_folder='templates', static_folder='static')
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)
    app.json.ensure_ascii = False
    configure_logging(app.config['LOG_LEVEL'])
    db.init_app(app)
    with app.app_context():
        db.create_all()
    app.register_blueprint(auth_bp)
    app.register_blueprint(items_bp)
    app.register_blueprint(api_bp)
    app.register_error_handler(NotFound, _not_found)
    app.register_error_handler(InfrastructureError, _infrastructure_error)
    app.add_template_filter(_yen, 'yen')
    return app


# ---------------------- Auth Helpers ----------------------
def current_user_id():
    uid = session.get('user_id')
    if uid and store.find_user(uid) is not None:
        return uid
    return None


def login_required(view_func):
    """Redirect to login without a session; otherwise pass ``owner_id`` to the view."""
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        owner_id = current_user_id()
        if owner_id is None:
            session.clear()
            return redirect(url_for('auth.login', next=request.path))
        return view_func(*args, owner_id=owner_id, **kwargs)
    return wrapped


def _start_session(user):
    session.clear()
    session['user_id'] = user.id
    session['user_email'] = user.email


def _safe_next(default):
    next_url = request.args.get('next') or ''
    # relative paths only
    if next_url.startswith('/') and not next_url.startswith('//'):
        return next_url
    return default


# ---------------------- Error Handlers ----------------------
def _not_found(exc):
    return exc.message, 404


def _infrastructure_error(exc):
    return messages.SERVER_ERROR, 500


def _yen(value):
    return f'{value:,}'


# ---------------------- Routes: Auth ----------------------
@auth_bp.route('/')
def home():
    return redirect(url_for('items.index'))


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user_id() is not None:
        return redirect(url_for('items.index'))
    if request.method == 'POST':
        email = request.form.get('email', '')
        try:
            user = auth.authenticate(email, request.form.get('password', ''))
        except InfrastructureError:
            return render_template('auth/login.html', error=messages.LOGIN_FAILED, email=email)
        except LedgerError as exc:
            return render_template('auth/login.html', error=exc.message, email=email)
        _start_session(user)
        return redirect(_safe_next(url_for('items.index')))
    return render_template('auth/login.html', error=None, email='')


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    if current_user_id() is not None:
        return redirect(url_for('items.index'))
    if request.method == 'POST':
        email = request.form.get('email', '')
        try:
            user = auth.register_user(
                email,
                request.form.get('password', ''),
                request.form.get('confirmPassword', ''),
            )
        except InfrastructureError:
            return render_template('auth/register.html', error=messages.REGISTER_FAILED, email=email)
        except LedgerError as exc:
            return render_template('auth/register.html', error=exc.message, email=email)
        _start_session(user)
        return redirect(url_for('items.index'))
    return render_template('auth/register.html', error=None, email='')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logger.info('User %s logged out', session.get('user_id'))
    session.clear()
    flash(messages.LOGGED_OUT, 'success')
    return redirect(url_for('auth.login'))


# ---------------------- Routes: Items ----------------------
@items_bp.route('')
@login_required
def index(owner_id):
    error = None
    try:
        filters = ItemFilter.from_args(request.args)
    except ValidationError as exc:
        error = exc.message
        filters = ItemFilter()
    items = engine.list_items(owner_id, filters)
    return render_template(
        'items/index.html',
        items=items,
        summary=engine.summarize(items),
        filters=filters.to_params(),
        error=error,
    )


@items_bp.route('/create', methods=['GET', 'POST'])
@login_required
def create(owner_id):
    if request.method == 'POST':
        form = request.form
        try:
            engine.create_item(
                owner_id,
                form.get('amount'),
                form.get('type'),
                form.get('event'),
                form.get('memo'),
            )
        except ValidationError as exc:
            return render_template('items/create.html', error=exc.message, form=form, item_types=ItemType)
        except InfrastructureError:
            return render_template('items/create.html', error=messages.ITEM_SAVE_FAILED, form=form, item_types=ItemType)
        flash(messages.ITEM_CREATED, 'success')
        return redirect(url_for('items.index'))
    return render_template('items/create.html', error=None, form={}, item_types=ItemType)


@items_bp.route('/edit/<int:item_id>', methods=['GET', 'POST'])
@login_required
def edit(item_id, owner_id):
    if request.method == 'POST':
        form = request.form
        try:
            engine.update_item(
                owner_id,
                item_id,
                form.get('amount'),
                form.get('type'),
                form.get('event'),
                form.get('memo'),
            )
        except ValidationError as exc:
            item = engine.get_item(owner_id, item_id)
            return render_template('items/edit.html', item=item, error=exc.message, form=form, item_types=ItemType)
        flash(messages.ITEM_UPDATED, 'success')
        return redirect(url_for('items.index'))
    item = engine.get_item(owner_id, item_id)
    form = {'amount': item.amount, 'type': item.type, 'event': item.event, 'memo': item.memo or ''}
    return render_template('items/edit.html', item=item, error=None, form=form, item_types=ItemType)


@items_bp.route('/delete/<int:item_id>', methods=['POST'])
@login_required
def delete(item_id, owner_id):
    engine.delete_item(owner_id, item_id)
    flash(messages.ITEM_DELETED, 'success')
    return redirect(url_for('items.index'))


@items_bp.route('/detail/<int:item_id>')
@login_required
def detail(item_id, owner_id):
    return render_template('items/detail.html', item=engine.get_item(owner_id, item_id))


# ---------------------- API Endpoints ----------------------
@api_bp.route('/items')
@login_required
def api_items(owner_id):
    """Filtered items and their totals as JSON."""
    try:
        filters = ItemFilter.from_args(request.args)
    except ValidationError as exc:
        return jsonify({'error': exc.message}), 400
    items = engine.list_items(owner_id, filters)
    return jsonify({
        'items': [item.to_dict() for item in items],
        'summary': engine.summarize(items).to_dict(),
        'filters': filters.to_params(),
    })


# ---------------------- Run App ----------------------
if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)), debug=True)
