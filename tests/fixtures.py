"""
Pickles captured from the legacy encoder.

The dict fixture is what the legacy side writes for
dict(key1="value1", key2="value2", key3="value3"); encoding the same map
must reproduce it byte for byte. The list fixture carries a bogus frame
length, which decoders are expected to ignore.
"""
import base64

DICT_PICKLE = base64.b64decode(
    "gASVNQAAAAAAAAB9lCiMBGtleTGUjAZ2YWx1ZTGUjARrZXkylIwGdmFsdWUylIwEa2V5M5SMBnZhbHVlM5R1Lg=="
)

LIST_PICKLE = base64.b64decode("gASVJwIAAAAAAAB9lCiMBnZhbHVlMZSMBnZhbHVlMpRlLg==")

HTML_PICKLE = base64.b64decode(
    "gASVFwIAAAAAAABYEAIAADxpbWcgYWx0PSIiIGJvcmRlcj0iMCIgaGVpZ2h0PSIxIiBzcmM9Imh0dHBzOi8vZW90cnguc3Vic3RhY2tjZG4uY29tL29wZW4/dG9rZW49ZXlKdElqb2lQREl3TWpRd09URXdNVGN6TmpRM0xqTXVPRGsxWlRFM01qYzRPV013TTJJNVprQnRaeTFrTVM1emRXSnpkR0ZqYXk1amIyMC1JaXdpZFNJNk1qRTROekl4TENKeUlqb2lZWGRoZUcxaGJqRXhRR2R0WVdsc0xtTnZiU0lzSW1RaU9pSnRaeTFrTVM1emRXSnpkR0ZqYXk1amIyMGlMQ0p3SWpveE5EZzNNelE0TURrc0luUWlPaUp1WlhkemJHVjBkR1Z5SWl3aVlTSTZJbTl1YkhsZmNHRnBaQ0lzSW5NaU9qUTFPRGN3T1N3aVl5STZJbkJ2YzNRaUxDSm1JanAwY25WbExDSndiM05wZEdsdmJpSTZJblJ2Y0NJc0ltbGhkQ0k2TVRjeU5UazRPVGcyTnl3aVpYaHdJam94TnpJNE5UZ3hPRFkzTENKcGMzTWlPaUp3ZFdJdE1DSXNJbk4xWWlJNkltVnZJbjAueW00S2hqNWR2TjQzLVZZVmFaS3pZdHZKM0Z0LWV0UDFUVVdOWVZQRm1PayIgc3R5bGU9ImhlaWdodDoxcHggIWltcG9ydGFudCIvPpQu"
)

HTML = (
    '<img alt="" border="0" height="1" src="https://eotrx.substackcdn.com/open?token=eyJtIjoiPDIwMjQwOTEwMTczNjQ3LjMuODk1ZTE3Mjc4OWMwM2I5ZkBtZy1kMS5zdWJzdGFjay5jb20-IiwidSI6MjE4NzIxLCJyIjoiYXdheG1hbjExQGdtYWlsLmNvbSIsImQiOiJtZy1kMS5zdWJzdGFjay5jb20iLCJwIjoxNDg3MzQ4MDksInQiOiJuZXdzbGV0dGVyIiwiYSI6Im9ubHlfcGFpZCIsInMiOjQ1ODcwOSwiYyI6InBvc3QiLCJmIjp0cnVlLCJwb3NpdGlvbiI6InRvcCIsImlhdCI6MTcyNTk4OTg2NywiZXhwIjoxNzI4NTgxODY3LCJpc3MiOiJwdWItMCIsInN1YiI6ImVvIn0.ym4Khj5dvN43-VYVaZKzYtvJ3Ft-etP1TUWNYVPFmOk" style="height:1px !important"/>'
)
