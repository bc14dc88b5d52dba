from kinesis_browser.tui.app import main

main()
