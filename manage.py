#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Trackboard - Kanban task tracker API
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Development settings by default
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Trackboard shortcuts
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # First-time setup
        if command == 'setup':
            print("🚀 Setting up Trackboard...")

            print("📊 Applying migrations...")
            if os.system('python manage.py migrate') != 0:
                print("❌ Migrations failed")
                return

            print("📁 Collecting static files...")
            os.system('python manage.py collectstatic --noinput')

            print("🌱 Loading demo data...")
            if os.system('python manage.py seed') == 0:
                print("✅ Setup complete!")
                print("🔑 Log in with: alice@trackboard.dev / password123")
            else:
                print("⚠️  Setup finished without demo data")
            return

        elif command == 'backup':
            print("💾 Dumping database...")
            from datetime import datetime
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_trackboard_{timestamp}.json"
            os.system(f'python manage.py dumpdata --indent 2 --exclude contenttypes --exclude sessions > {backup_file}')
            print(f"✅ Backup written: {backup_file}")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
