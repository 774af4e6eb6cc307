"""Constants shared by the tests."""
TEST_BUCKET_NAME = "test-drive-bucket"
TEST_REGION = "us-east-1"
TEST_FILE_CONTENT = b"Hello, world!"
TEST_FILE_CONTENT_TYPE = "text/plain"
