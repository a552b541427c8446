import pickle

from numstats.services.errors import CouldNotConvert, DataType, EmptyCollection, StatsError


def test_errors_are_value_errors():
    assert issubclass(StatsError, ValueError)
    assert isinstance(EmptyCollection(), StatsError)
    assert isinstance(CouldNotConvert(DataType.USIZE, DataType.ITEM), StatsError)


def test_errors_compare_by_kind_and_fields():
    assert EmptyCollection() == EmptyCollection()
    assert CouldNotConvert(DataType.USIZE, DataType.ITEM) == CouldNotConvert(DataType.USIZE, DataType.ITEM)
    assert CouldNotConvert(DataType.USIZE, DataType.ITEM) != CouldNotConvert(DataType.ITEM, DataType.F64)
    assert EmptyCollection() != CouldNotConvert(DataType.USIZE, DataType.ITEM)


def test_to_dict():
    assert EmptyCollection().to_dict() == {"error": "EmptyCollection", "message": "collection is empty"}
    assert CouldNotConvert(DataType.ITEM, DataType.F64).to_dict() == {
        "error": "CouldNotConvert",
        "message": "could not convert Item to F64",
        "from": "Item",
        "to": "F64",
    }


def test_errors_pickle():
    err = CouldNotConvert(DataType.F64, DataType.ITEM)
    assert pickle.loads(pickle.dumps(err)) == err
    assert pickle.loads(pickle.dumps(EmptyCollection())) == EmptyCollection()
