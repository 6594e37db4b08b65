"""
PynamoAdmin constants
"""

# Operations
DESCRIBE_TABLE = 'DescribeTable'
CREATE_TABLE = 'CreateTable'
UPDATE_TABLE = 'UpdateTable'
DELETE_TABLE = 'DeleteTable'
LIST_TABLES = 'ListTables'
TABLE_OPERATIONS = [CREATE_TABLE, DELETE_TABLE, DESCRIBE_TABLE, LIST_TABLES, UPDATE_TABLE]

# Request Parameters
GLOBAL_SECONDARY_INDEX_UPDATES = 'GlobalSecondaryIndexUpdates'
EXCLUSIVE_START_TABLE_NAME = 'ExclusiveStartTableName'
ATTR_DEFINITIONS = 'AttributeDefinitions'
TABLE_DESCRIPTION = 'TableDescription'
TABLE_STATUS = 'TableStatus'
TABLE_NAME = 'TableName'
KEY_SCHEMA = 'KeySchema'
ATTR_NAME = 'AttributeName'
ATTR_TYPE = 'AttributeType'
ITEM_COUNT = 'ItemCount'
INDEX_NAME = 'IndexName'
TABLE_KEY = 'Table'
KEY_TYPE = 'KeyType'
UPDATE = 'Update'
LIMIT = 'Limit'
KEY = 'Key'

# Response Parameters
TABLE_NAMES = 'TableNames'
LAST_EVALUATED_TABLE_NAME = 'LastEvaluatedTableName'
CREATION_DATE_TIME = 'CreationDateTime'
TABLE_SIZE_BYTES = 'TableSizeBytes'
INDEX_SIZE_BYTES = 'IndexSizeBytes'

# Table statuses
CREATING = 'CREATING'
ACTIVE = 'ACTIVE'
UPDATING = 'UPDATING'
DELETING = 'DELETING'
TABLE_STATUSES = [CREATING, ACTIVE, UPDATING, DELETING]
UNKNOWN_STATUS = 'unknown'

# Defaults
DEFAULT_ENCODING = 'utf-8'
DEFAULT_REGION = 'us-east-1'
SERVICE_NAME = 'dynamodb'
HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500

# Provisioned throughput
PROVISIONED_THROUGHPUT = 'ProvisionedThroughput'
READ_CAPACITY_UNITS = 'ReadCapacityUnits'
WRITE_CAPACITY_UNITS = 'WriteCapacityUnits'
NUMBER_OF_DECREASES_TODAY = 'NumberOfDecreasesToday'

# Key attribute types
BINARY = 'B'
NUMBER = 'N'
STRING = 'S'
KEY_ATTRIBUTE_TYPES = [STRING, NUMBER, BINARY]

# Key types
HASH = 'HASH'
RANGE = 'RANGE'
KEY_TYPES = [HASH, RANGE]

# Constants needed for creating indexes
LOCAL_SECONDARY_INDEXES = 'LocalSecondaryIndexes'
GLOBAL_SECONDARY_INDEXES = 'GlobalSecondaryIndexes'
PROJECTION = 'Projection'
PROJECTION_TYPE = 'ProjectionType'
NON_KEY_ATTRIBUTES = 'NonKeyAttributes'
KEYS_ONLY = 'KEYS_ONLY'
ALL = 'ALL'
INCLUDE = 'INCLUDE'
PROJECTION_TYPES = [ALL, KEYS_ONLY, INCLUDE]

# Error codes
THROTTLING_EXCEPTION = 'ThrottlingException'
PROVISIONED_THROUGHPUT_EXCEEDED_EXCEPTION = 'ProvisionedThroughputExceededException'
RESOURCE_NOT_FOUND_EXCEPTION = 'ResourceNotFoundException'
RATE_LIMITING_ERROR_CODES = [PROVISIONED_THROUGHPUT_EXCEEDED_EXCEPTION, THROTTLING_EXCEPTION]

# Error response fields
ERROR = 'Error'
CODE = 'Code'
MESSAGE = 'Message'
RESPONSE_METADATA = 'ResponseMetadata'
HTTP_STATUS_CODE = 'HTTPStatusCode'
