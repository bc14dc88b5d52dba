"""
Terminal UI for the Kinesis Stream Browser.

Usage:
    python -m kinesis_browser.tui.app --region eu-west-1

Components:
    - StreamBrowserApp: Main application class
    - BrowserScreen: Stream, record, detail and log panels
    - Navigator: Panel focus state machine
    - IngestionPipeline: Background shard polling
    - RecordCache: Display key to payload store
    - InsertRecordScreen: Modal overlay for publishing a record
"""
