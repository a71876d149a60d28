from cli.main import concat_sha1_cli


if __name__ == '__main__':
    concat_sha1_cli()
