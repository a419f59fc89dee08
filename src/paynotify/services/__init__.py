"""
Services package: row selection, naming and the external collaborators
(Sheets, Drive, Gmail, PDF rendering) consumed by the workflows.
"""
