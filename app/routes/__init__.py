"""
Routes package
Đăng ký tất cả các blueprints
"""
from .api_system import system_api_bp
from .api_students import student_api_bp
from .api_training import training_api_bp
from .api_attendance import attendance_api_bp


def register_blueprints(app, url_prefix='/api'):
    """Đăng ký tất cả các blueprints với Flask app, dưới cùng một prefix."""
    prefix = (url_prefix or '').rstrip('/')
    for blueprint in (system_api_bp, student_api_bp, training_api_bp, attendance_api_bp):
        app.register_blueprint(blueprint, url_prefix=f"{prefix}{blueprint.url_prefix or ''}")

    app.logger.info(f"✅ Đã đăng ký tất cả blueprints dưới {prefix or '/'}")
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        if rule.endpoint != 'static':
            methods = ','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))
            app.logger.debug(f"  {methods:<5} {rule.rule}")
