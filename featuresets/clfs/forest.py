# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Random forests on FeatureSets, provided by scikit-learn (AKA sklearn)

The labels of a FeatureSet are the target variable, its features the
predictors.  Floating point labels train a regression forest, any other
labels a classification forest.

Forests are configured with a dict of the following keys (defaults in
`DEFAULT_BUILD_FOREST_CONFIG` and `DEFAULT_NFOLDCV_FOREST_CONFIG`):

n_subfeatures
  Number of features considered per split.  -1 picks the square root of
  the number of features (a third of them for regression), 0 all of them.
n_trees
  Number of trees.
partial_sampling
  Fraction of samples drawn (with replacement) to train each tree.
max_depth
  Maximal depth of each tree, -1 for unlimited.
min_samples_leaf, min_samples_split
  Minimal number of samples in a leaf and to consider a split.
min_purity_increase
  Minimal impurity decrease of a split.
n_folds
  Number of folds of the cross-validation (`nfold_cv_forest()` only).
"""

__docformat__ = 'restructuredtext'

from collections import namedtuple

import numpy as np

from featuresets.base import cfg, externals, verbose as verbose_
from featuresets.base.dochelpers import _repr_attrs
from featuresets._random import get_rng

if __debug__:
    from featuresets.base import debug

# do conditional to be able to build module reference
externals.exists('skl', raise_=True)

from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor
from sklearn.metrics import cohen_kappa_score
from sklearn.metrics import confusion_matrix as _skl_confusion_matrix
from sklearn.model_selection import KFold, cross_val_score


DEFAULT_BUILD_FOREST_CONFIG = dict(
    n_subfeatures=-1,
    n_trees=10,
    partial_sampling=0.7,
    max_depth=-1,
    min_samples_leaf=1,
    min_samples_split=2,
    min_purity_increase=0.0)

DEFAULT_NFOLDCV_FOREST_CONFIG = dict(
    n_folds=4,
    **DEFAULT_BUILD_FOREST_CONFIG)


class LearnerError(Exception):
    """Base class for exceptions thrown by the learners
    """
    pass


class FailedToTrainError(LearnerError):
    """Thrown when training of a learner fails
    """
    pass


class FailedToPredictError(LearnerError):
    """Thrown when the prediction of a trained learner fails
    """
    pass


class ConfusionMatrix(namedtuple('ConfusionMatrix',
                                 ['classes', 'matrix', 'accuracy', 'kappa'])):
    """Confusion matrix of predicted (columns) vs true (rows) labels

    Attributes
    ----------
    classes : ndarray
      Sorted class labels indexing rows and columns of `matrix`.
    matrix : ndarray
      Counts of samples of the true class (row) predicted as class
      (column).
    accuracy : float
      Fraction of correctly predicted samples.
    kappa : float
      Cohen's kappa.
    """

    __slots__ = ()

    def __str__(self):
        return "%s(accuracy=%.3f, kappa=%.3f)\n%s" \
               % (self.__class__.__name__, self.accuracy, self.kappa,
                  self.matrix)


def _merged_config(defaults, config):
    config = dict(config or {})
    unknown = set(config).difference(defaults)
    if unknown:
        raise ValueError("Unknown forest configuration key(s): %s. Known "
                         "are: %s" % (', '.join(sorted(unknown)),
                                      ', '.join(sorted(defaults))))
    merged = dict(defaults)
    merged.update(config)
    return merged


def _is_regression(labels):
    return np.asarray(labels).dtype.kind == 'f'


def _random_state(rng):
    """sklearn wants an int (or RandomState) for seeding"""
    return int(get_rng(rng).integers(2**31 - 1))


def _make_forest(config, regression, random_state, **kwargs):
    """Instantiate an untrained sklearn forest for `config`"""
    n_subfeatures = config['n_subfeatures']
    if n_subfeatures == -1:
        max_features = 1.0 / 3 if regression else 'sqrt'
    elif n_subfeatures == 0:
        max_features = None
    else:
        max_features = int(n_subfeatures)
    max_depth = config['max_depth']

    kwargs.setdefault('n_jobs',
                      cfg.get_as_dtype('forest', 'n jobs', int, default=None))
    cls = {True: RandomForestRegressor,
           False: RandomForestClassifier}[regression]
    forest = cls(n_estimators=config['n_trees'],
                 max_features=max_features,
                 bootstrap=True,
                 max_samples=config['partial_sampling'],
                 max_depth=None if max_depth < 0 else max_depth,
                 min_samples_leaf=config['min_samples_leaf'],
                 min_samples_split=config['min_samples_split'],
                 min_impurity_decrease=config['min_purity_increase'],
                 random_state=random_state,
                 **kwargs)
    if __debug__:
        debug('CLF_', "Created %r" % forest)
    return forest


def build_forest(fs, config=None, rng=None, **kwargs):
    """Train a random forest on the features and labels of `fs`

    Parameters
    ----------
    fs : FeatureSet
    config : dict, optional
      Overrides of `DEFAULT_BUILD_FOREST_CONFIG`.
    rng : None or int or numpy.random.Generator, optional
      Source of randomness.  If None, it follows `featuresets.seed()`.
    **kwargs
      Passed to the sklearn estimator (e.g. ``n_jobs``).

    Returns
    -------
    RandomForestClassifier or RandomForestRegressor
      Trained forest.

    Raises
    ------
    ValueError
      On unknown configuration keys.
    FailedToTrainError
      If sklearn refuses the data.
    """
    config = _merged_config(DEFAULT_BUILD_FOREST_CONFIG, config)
    labels = np.asarray(fs.labels)
    forest = _make_forest(config, _is_regression(labels), _random_state(rng),
                          **kwargs)
    if __debug__:
        debug('CLF', "Training forest on %s" % fs)
    try:
        forest.fit(np.asarray(fs.features), labels)
    except (ValueError, np.linalg.LinAlgError) as e:
        raise FailedToTrainError(
              "Failed to train %s on %s. Got '%s' during call to fit()."
              % (forest, fs, e))
    return forest


def nfold_cv_forest(fs, config=None, verbose=False, rng=None):
    """Cross-validate random forests on `fs`

    Samples are shuffled and split into ``n_folds`` folds.  A forest is
    trained on all but one fold and tested on the remaining one, for every
    fold.

    Parameters
    ----------
    fs : FeatureSet
    config : dict, optional
      Overrides of `DEFAULT_NFOLDCV_FOREST_CONFIG`.
    verbose : bool, optional
      Report the score of every fold.
    rng : None or int or numpy.random.Generator, optional

    Returns
    -------
    ndarray
      Accuracy (classification) or coefficient of determination
      (regression) per fold.
    """
    config = _merged_config(DEFAULT_NFOLDCV_FOREST_CONFIG, config)
    labels = np.asarray(fs.labels)
    regression = _is_regression(labels)
    rng = get_rng(rng)
    forest = _make_forest(config, regression, _random_state(rng))
    folds = KFold(n_splits=config['n_folds'], shuffle=True,
                  random_state=_random_state(rng))
    if __debug__:
        debug('CLF', "%d-fold cross-validation on %s"
              % (config['n_folds'], fs))
    try:
        scores = cross_val_score(forest, np.asarray(fs.features), labels,
                                 cv=folds, error_score='raise')
    except (ValueError, np.linalg.LinAlgError) as e:
        raise FailedToTrainError(
              "Failed to cross-validate %s on %s. Got '%s'." % (forest, fs, e))
    if verbose:
        measure = {True: 'R^2', False: 'accuracy'}[regression]
        for i, score in enumerate(scores):
            verbose_(0, "Fold %d: %s = %.4f" % (i + 1, measure, score))
        verbose_(0, "Mean %s: %.4f" % (measure, np.mean(scores)))
    return scores


def apply_forest(forest, fs, use_multithreading=False):
    """Predict the labels of the samples of `fs` with a trained `forest`

    Parameters
    ----------
    forest
      As returned by `build_forest()`.
    fs : FeatureSet or array
      FeatureSet or plain samples x features matrix.
    use_multithreading : bool, optional
      Spread the trees over all available cores.
    """
    data = np.asarray(fs.features if hasattr(fs, 'features') else fs)
    n_jobs = forest.n_jobs
    if use_multithreading:
        forest.n_jobs = -1
    try:
        return forest.predict(data)
    except ValueError as e:
        raise FailedToPredictError(
              "Failed to predict %s on data of shape %s. Got '%s' during"
              " call to predict()." % (forest, data.shape, e))
    finally:
        forest.n_jobs = n_jobs


def confusion_matrix(forest, fs, use_multithreading=False):
    """Compare predictions of a classification `forest` with labels of `fs`

    Returns
    -------
    ConfusionMatrix
    """
    if isinstance(forest, RandomForestRegressor):
        raise ValueError("Confusion matrices need a classification forest")
    predicted = apply_forest(forest, fs,
                             use_multithreading=use_multithreading)
    truth = np.asarray(fs.labels)
    classes = np.unique(np.concatenate((truth, predicted)))
    matrix = _skl_confusion_matrix(truth, predicted, labels=classes)
    accuracy = float(np.trace(matrix)) / max(matrix.sum(), 1)
    kappa = float(cohen_kappa_score(truth, predicted, labels=classes))
    if __debug__:
        debug('CLF', "Confusion matrix on %s: accuracy=%.3f %s"
              % (fs, accuracy, ' '.join(_repr_attrs(forest, ['n_jobs']))))
    return ConfusionMatrix(classes, matrix, accuracy, kappa)
