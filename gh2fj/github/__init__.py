from .api import GithubSource, RepositoryListing
