"""Basic usage examples for filetransport."""

from pathlib import Path
from filetransport import InputData, OutputData, Repository, Resource
from filetransport.providers import LocalRepositoryProvider, create_provider
from filetransport.utils.logging import configure_logging


def example_put_and_get():
    """Example: Upload a file and download it again."""
    with create_provider('file:///tmp/repo') as provider:
        provider.put(Path('artifact.jar'), 'org/example/artifact/1.0/artifact-1.0.jar')
        provider.get('org/example/artifact/1.0/artifact-1.0.jar', Path('downloaded.jar'))
    print("Round trip complete!")


def example_streams():
    """Example: Work with the raw streams."""
    provider = LocalRepositoryProvider(Repository('/tmp/repo'))
    provider.open_connection()

    output_data = OutputData(Resource('notes/readme.txt'))
    provider.fill_output_data(output_data)
    with output_data.output_stream as stream:
        stream.write(b'hello')

    input_data = InputData(Resource('notes/readme.txt'))
    provider.fill_input_data(input_data)
    with input_data.input_stream as stream:
        print(stream.read(), input_data.resource.content_length)

    provider.close_connection()


def example_listing():
    """Example: Publish a directory and list it."""
    configure_logging('DEBUG')
    with create_provider('/tmp/repo') as provider:
        provider.put_directory(Path('site'), 'docs/site')
        for name in provider.get_file_list('docs/site'):
            print(name)


if __name__ == '__main__':
    example_put_and_get()
    example_streams()
    example_listing()
