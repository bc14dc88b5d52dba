"""
Kinesis Stream Browser.

A Textual-based terminal dashboard for browsing the records of a Kinesis
data stream, rendering a record payload, exporting it, and publishing
new records.

Usage:
    python -m kinesis_browser.tui.app --region eu-west-1

Components:
    - StreamBrowserApp: Main application class
    - Navigator: Panel focus state machine
    - IngestionPipeline: Bounded shard polling into the record cache
    - RecordCache: Display key to payload store for one browse session
    - KinesisStreamClient: boto3 wrapper for the stream service
"""
