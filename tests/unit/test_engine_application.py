from roomapp.bootstrap import DependencyContainer
from roomapp.runtime import EngineApplication
from tests.helpers import FixedClock, RecordingSink, local_time, make_settings
from users import UserManager

NOW = local_time(2026, 3, 10, 9, 0)


def _application(tmp_path, **overrides):
    settings = make_settings(DATA_DIRECTORY=str(tmp_path))
    users = UserManager(settings.users_file)
    users.save_user({'user_id': 1, 'name': 'Ada', 'email': 'ada@example.com'})
    users.save_user({'user_id': 2, 'name': 'Lin', 'email': 'lin@example.com'})
    container = DependencyContainer(
        settings,
        overrides={'clock': FixedClock(NOW), 'user_manager': users, 'event_sink': RecordingSink(), **overrides},
    )
    return EngineApplication(settings, container=container, seed_rooms=True)


def test_container_caches_and_shares_components(tmp_path):
    settings = make_settings(DATA_DIRECTORY=str(tmp_path))
    container = DependencyContainer(settings, overrides={'clock': FixedClock(NOW)})

    deps = container.build_dependencies()

    assert container.store is deps.store
    assert deps.reservation_service.waitlist is deps.waitlist_service
    assert deps.reservation_service.store is deps.scheduler.store
    assert deps.scheduler.clock is deps.clock
    assert set(deps.as_dict()) >= {'reservation_service', 'waitlist_service', 'scheduler'}


def test_dispatch_round_trip(tmp_path):
    app = _application(tmp_path)

    created = app.dispatch(
        'create_reservation',
        room_id=1,
        user_id=1,
        date='2026-03-10',
        start_time='10:00',
        end_time='11:00',
        participants=[2],
    )
    assert created['success'] is True
    reservation_id = created['data']['id']

    joined = app.dispatch(
        'join_waitlist', user_id=2, room_id=1, date='2026-03-10', start_time='10:00', end_time='11:00'
    )
    assert joined['success'] is True

    timeline = app.dispatch('list_reservations_for_room', room_id=1)
    assert timeline['data'][0]['user_name'] == 'Ada'

    cancelled = app.dispatch('cancel_reservation', reservation_id=reservation_id)
    assert cancelled['success'] is True
    assert cancelled['data']['promoted']['user_id'] == 2

    again = app.dispatch('cancel_reservation', reservation_id=reservation_id)
    assert again['status'] == 404

    popular = app.dispatch('popular_rooms')
    assert popular['data'][0]['reservation_count'] == 2


def test_dispatch_maps_errors(tmp_path):
    app = _application(tmp_path)

    too_far = app.dispatch(
        'create_reservation', room_id=1, user_id=1, date='2026-03-18', start_time='10:00', end_time='11:00'
    )
    assert too_far == {
        'success': False,
        'code': 'out_of_window',
        'message': too_far['message'],
        'status': 400,
    }
    assert app.dispatch('does_not_exist')['status'] == 404
    assert app.dispatch('popular_rooms', unexpected=True)['status'] == 400


def test_start_and_stop(tmp_path):
    app = _application(tmp_path)

    app.start()
    assert app.scheduler.running
    app.stop()

    assert not app.scheduler.running
    app.stop()
