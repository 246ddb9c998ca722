# course library to json encoding

import datetime
import decimal
from uuid import UUID
from flask.json.provider import DefaultJSONProvider
import courselib


class CourseLibraryJSONProvider(DefaultJSONProvider):
    """
    Flask JSON encoding

    keys are not sorted: shaped resources keep the declared or requested field order
    links are converted with Link.to_dict before encoding, namedtuples encode as lists
    """

    sort_keys = False

    # pylint: disable=too-many-return-statements
    def default(self, obj):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, datetime.datetime):
            return obj.isoformat()
        if isinstance(obj, datetime.date):
            return obj.isoformat()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)

        courselib.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
