"""
PynamoAdmin Library
^^^^^^^^^^^^^^^^^^^

A table administration client for DynamoDB

"""
__author__ = 'PynamoAdmin contributors'
__license__ = 'MIT'
__version__ = '0.1.0'
