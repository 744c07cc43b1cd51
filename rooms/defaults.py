"""Rooms written to an empty catalog on first start."""

from reservations.models import RoomRecord

DEFAULT_ROOMS = (
    RoomRecord(id=1, name="Engineering 1 - 101", location="Engineering 1", capacity=50,
               equipment=("projector", "whiteboard")),
    RoomRecord(id=2, name="Engineering 1 - 102", location="Engineering 1", capacity=40,
               equipment=("projector",)),
    RoomRecord(id=3, name="Engineering 3 - 201", location="Engineering 3", capacity=60,
               equipment=("whiteboard",)),
    RoomRecord(id=4, name="Engineering 3 - 202", location="Engineering 3", capacity=70,
               equipment=("projector", "whiteboard")),
    RoomRecord(id=5, name="Engineering 5 - 301", location="Engineering 5", capacity=30,
               equipment=("projector",)),
    RoomRecord(id=6, name="Engineering 5 - 302", location="Engineering 5", capacity=25,
               equipment=("whiteboard",)),
    RoomRecord(id=7, name="Library 101", location="Library", capacity=20,
               equipment=("projector", "whiteboard")),
    RoomRecord(id=8, name="Library 102", location="Library", capacity=35,
               equipment=("projector",)),
    RoomRecord(id=9, name="Natural Sciences 201", location="Natural Sciences", capacity=50,
               equipment=("whiteboard",)),
    RoomRecord(id=10, name="Natural Sciences 202", location="Natural Sciences", capacity=60,
               equipment=("projector",)),
    RoomRecord(id=11, name="Business 101", location="Business", capacity=45,
               equipment=("whiteboard",)),
    RoomRecord(id=12, name="Business 102", location="Business", capacity=30,
               equipment=("projector",)),
)
