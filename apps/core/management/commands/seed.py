# apps/core/management/commands/seed.py

from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Lane, User, Workspace
from apps.core.utils import get_service

DEMO_PASSWORD = 'password123'

DEMO_USERS = [
    ('alice@trackboard.dev', 'Alice Admin'),
    ('bob@trackboard.dev', 'Bob Builder'),
    ('carol@trackboard.dev', 'Carol Viewer'),
]

DEMO_LABELS = [
    ('bug', '#EF4444'),
    ('feature', '#3B82F6'),
    ('docs', '#10B981'),
]

# (lane name, title, priority)
DEMO_TASKS = [
    ('To Do', 'Write onboarding guide', 'LOW'),
    ('To Do', 'Design notification settings', 'MEDIUM'),
    ('To Do', 'Fix login redirect loop', 'CRITICAL'),
    ('In Progress', 'Board drag and drop', 'HIGH'),
    ('In Progress', 'Task comments API', 'MEDIUM'),
    ('Review', 'Lane WIP limits', 'HIGH'),
    ('Done', 'Project skeleton', 'LOW'),
]


class Command(BaseCommand):
    help = 'Loads demo users, a workspace and a board with sample tasks'

    def handle(self, *args, **options):
        if Workspace.objects.exists():
            raise CommandError('Database already has data - seed only runs on an empty database')

        self.stdout.write('🌱 Loading demo data...')

        auth_service = get_service('core', 'auth_service')
        workspace_service = get_service('core', 'workspace_service')
        board_service = get_service('board')
        task_service = get_service('tasks')

        # Users
        users = []
        for email, name in DEMO_USERS:
            auth_service.register({'email': email, 'password': DEMO_PASSWORD, 'name': name})
            users.append(User.objects.get(email=email))
            self.stdout.write(f'  👤 {email}')
        alice, bob, carol = users

        # Workspace, members and labels
        workspace = workspace_service.create_workspace(
            alice, {'name': 'Demo Workspace', 'description': 'Sample data for local development'}
        )
        workspace_service.add_member(workspace['id'], alice, {'user_id': bob.id, 'role': 'ADMIN'})
        workspace_service.add_member(workspace['id'], alice, {'user_id': carol.id})

        labels = {}
        for name, color in DEMO_LABELS:
            labels[name] = workspace_service.create_label(
                workspace['id'], alice, {'name': name, 'color': color}
            )
        self.stdout.write(f'  🏢 Workspace: {workspace["name"]} ({len(labels)} labels)')

        # Board with the default lanes
        board = board_service.create_board(
            alice, {'workspace_id': workspace['id'], 'name': 'Product Roadmap'}
        )
        board_service.add_member(board['id'], alice, {'user_id': bob.id, 'role': 'MEMBER'})
        board_service.add_member(board['id'], alice, {'user_id': carol.id, 'role': 'VIEWER'})

        lanes = {lane.name: lane for lane in Lane.objects.filter(board_id=board['id'])}
        self.stdout.write(f'  📋 Board: {board["name"]} ({len(lanes)} lanes)')

        # Tasks
        for lane_name, title, priority in DEMO_TASKS:
            task = task_service.create_task(alice, {
                'board_id': board['id'],
                'lane_id': lanes[lane_name].id,
                'title': title,
                'priority': priority,
            })
            if priority in ('HIGH', 'CRITICAL'):
                task_service.assign_user(task['id'], alice, bob.id)
            if title.startswith('Fix'):
                task_service.add_label(task['id'], alice, labels['bug']['id'])

        self.stdout.write(f'  ✅ {len(DEMO_TASKS)} tasks created')

        self.stdout.write(
            self.style.SUCCESS(
                '\n✅ DEMO DATA LOADED!\n'
                '\n'
                f'Log in with any of: {", ".join(email for email, _ in DEMO_USERS)}\n'
                f'Password: {DEMO_PASSWORD}\n'
            )
        )
