# apps/board/signals.py

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from apps.core.models import Lane, Task

from . import events


@receiver(pre_save, sender=Task)
def remember_previous_lane(sender, instance, **kwargs):
    """
    Keeps the lane the task had before this save

    Lets post_save tell a move from a plain edit.
    """
    instance._previous_lane_id = None
    if instance.pk:
        instance._previous_lane_id = (
            sender.objects.filter(pk=instance.pk).values_list('lane_id', flat=True).first()
        )


@receiver(post_save, sender=Lane)
def lane_saved(sender, instance, created, **kwargs):
    action = events.LANE_CREATED if created else events.LANE_UPDATED
    events.publish_on_commit(instance.board_id, action, instance.to_dict())


@receiver(post_delete, sender=Lane)
def lane_deleted(sender, instance, **kwargs):
    events.publish_on_commit(instance.board_id, events.LANE_DELETED, {'id': instance.id})


@receiver(post_save, sender=Task)
def task_saved(sender, instance, created, **kwargs):
    if created:
        action = events.TASK_CREATED
    elif getattr(instance, '_previous_lane_id', None) not in (None, instance.lane_id):
        action = events.TASK_MOVED
    else:
        action = events.TASK_UPDATED

    message = instance.to_dict()
    if action == events.TASK_MOVED:
        message['fromLaneId'] = instance._previous_lane_id
    events.publish_on_commit(instance.board_id, action, message)


@receiver(post_delete, sender=Task)
def task_deleted(sender, instance, **kwargs):
    events.publish_on_commit(
        instance.board_id,
        events.TASK_DELETED,
        {'id': instance.id, 'laneId': instance.lane_id},
    )
