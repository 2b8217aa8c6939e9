import random

import pytest

from artist_roster_api.app.core.errors import NotFoundError, PartialReorderError, StoreError
from artist_roster_api.app.schemas.artist import ArtistCreate, ReorderItem
from artist_roster_api.app.services.artist_service import ArtistService


@pytest.fixture
def service(conn):
    return ArtistService(conn)


async def add(service, name, order, url=None):
    return await service.add_artist(ArtistCreate(name=name, order=order, instagram_url=url))


async def test_list_is_sorted_by_order_for_any_insertion_sequence(service):
    orders = [7, -1, 3.5, 0, 12, 3, 100, 2]
    random.Random(42).shuffle(orders)
    for i, order in enumerate(orders):
        await add(service, f"artist-{i}", order)

    listed = [a.order for a in await service.list_artists()]
    assert listed == sorted(orders)


async def test_equal_orders_keep_insertion_order(service):
    first = await add(service, "first", 1)
    second = await add(service, "second", 1)
    third = await add(service, "third", 1)
    await add(service, "zero", 0)

    names = [a.name for a in await service.list_artists()]
    assert names == ["zero", "first", "second", "third"]
    ids = [a.id for a in await service.list_artists()][1:]
    assert ids == [first.id, second.id, third.id]


async def test_add_returns_record_with_fresh_id(service):
    existing = await add(service, "existing", 1)
    created = await add(service, "New Artist", 4, url="https://instagram.com/new")

    assert created.id != existing.id
    assert created.name == "New Artist"
    assert created.instagram_url == "https://instagram.com/new"
    assert created.order == 4

    listed = {a.id: a for a in await service.list_artists()}
    assert listed[created.id] == created


async def test_add_does_not_renumber_duplicates(service):
    a = await add(service, "a", 2)
    b = await add(service, "b", 2)
    listed = await service.list_artists()
    assert [x.order for x in listed] == [2, 2]
    assert {x.id for x in listed} == {a.id, b.id}


async def test_orders_round_trip_as_int_or_float(service):
    await add(service, "int", 3)
    await add(service, "float", 3.25)
    listed = await service.list_artists()
    assert isinstance(listed[0].order, int)
    assert listed[1].order == 3.25


async def test_delete_removes_only_that_record(service):
    keep1 = await add(service, "keep1", 1)
    victim = await add(service, "victim", 2)
    keep2 = await add(service, "keep2", 3)

    await service.delete_artist(victim.id)

    assert [a.id for a in await service.list_artists()] == [keep1.id, keep2.id]


async def test_delete_unknown_id_raises_and_changes_nothing(service):
    await add(service, "a", 1)
    before = await service.list_artists()

    with pytest.raises(NotFoundError):
        await service.delete_artist("does-not-exist")

    assert await service.list_artists() == before


async def test_reorder_swaps_positions(service):
    id1 = (await add(service, "one", 1)).id
    id2 = (await add(service, "two", 2)).id

    applied = await service.reorder_artists([ReorderItem(id=id1, order=5), ReorderItem(id=id2, order=3)])

    assert applied == 2
    assert [a.id for a in await service.list_artists()] == [id2, id1]


async def test_reorder_with_unknown_id_applies_valid_updates_and_fails(service):
    id1 = (await add(service, "one", 1)).id
    id2 = (await add(service, "two", 2)).id
    id3 = (await add(service, "three", 3)).id

    batch = [
        ReorderItem(id=id1, order=30),
        ReorderItem(id="ghost", order=0),
        ReorderItem(id=id2, order=20),
        ReorderItem(id=id3, order=10),
    ]
    with pytest.raises(PartialReorderError) as excinfo:
        await service.reorder_artists(batch)

    assert excinfo.value.missing_ids == ["ghost"]
    assert excinfo.value.status_code == 500
    listed = await service.list_artists()
    assert [(a.id, a.order) for a in listed] == [(id3, 10), (id2, 20), (id1, 30)]


async def test_reorder_empty_batch_is_a_no_op(service):
    await add(service, "a", 1)
    assert await service.reorder_artists([]) == 0


async def test_store_failure_is_wrapped(service, conn):
    conn.close()
    with pytest.raises(StoreError) as excinfo:
        await service.list_artists()
    assert excinfo.value.message == "Internal server error"
